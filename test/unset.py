"""
Tests for the Unset sentinel and the small helpers of chatargs.utils.

This module verifies:
- Singleton identity, falsy semantics and representation of `Unset`.
- Copying and pickling preserve identity.
- Finality (the sentinel type cannot be subclassed).
- coalesce/rename/mirror behavior used by the configs and the builder.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

import chatargs
from chatargs.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPicklePreservesIdentity(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionAnnotation(self) -> None:
        self.assertEqual(int | UnsetType, UnsetType | int)


class HelpersTest(TestCase):
    """
    Behavioral tests for coalesce, rename and mirror.
    """

    def testCoalesceReplacesUnsetOnly(self) -> None:
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 3), 0)
        self.assertIsNone(coalesce(None, 3))

    def testRenameFunctionForm(self) -> None:
        function = rename(lambda: None, "step")
        self.assertEqual(function.__name__, "step")
        self.assertEqual(function.__qualname__, "step")

    def testRenameDecoratorForm(self) -> None:
        @rename("number")
        def step():
            pass

        self.assertEqual(step.__name__, "number")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(5, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 5)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            count = mirror("count")

            def __init__(self):
                self._items = ["a", "b"]
                self._table = {"a": 1}
                self._count = 2

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.count, 2)
        with self.assertRaises(AttributeError):
            holder.count = 3


class PackageTest(TestCase):

    def testVersionMetadataAgrees(self) -> None:
        self.assertEqual(chatargs.__version__, "0.1.0")
        self.assertEqual(chatargs.version_info[:3], (0, 1, 0))
        self.assertEqual(".".join(map(str, chatargs.version_info[:3])), chatargs.__version__)


if __name__ == '__main__':
    unittest.main()
