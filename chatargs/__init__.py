__title__ = 'chatargs'
__author__ = 'chatargs contributors'
__license__ = 'MIT'
__version__ = "0.1.0"

from .builder import *
from .configs import *
from .converters import *
from .faults import *
from .middleware import *
from .parsers import *
from .results import *
from .tokens import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of every public module
__all__ += builder.__all__  # type: ignore[attr-defined]
__all__ += configs.__all__  # type: ignore[attr-defined]
__all__ += converters.__all__  # type: ignore[attr-defined]
__all__ += faults.__all__  # type: ignore[attr-defined]
__all__ += middleware.__all__  # type: ignore[attr-defined]
__all__ += parsers.__all__  # type: ignore[attr-defined]
__all__ += results.__all__  # type: ignore[attr-defined]
__all__ += tokens.__all__  # type: ignore[attr-defined]
