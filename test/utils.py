"""
Tests for the internal helpers.

This module verifies semantic guarantees of the `Unset` sentinel and of the
small helpers built around it:
- Singleton identity, falsy semantics and stable representation.
- Copy/deepcopy preserve identity; the type is final.
- rename() and mirror() behave as documented.
"""
import copy
import unittest
from unittest import TestCase

from argbind.utils import *


class UnsetTest(TestCase):
    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class HelpersTest(TestCase):
    def testRenameFunctionForm(self) -> None:
        def work():
            pass

        rename(work, "do_work")
        self.assertEqual((work.__name__, work.__qualname__), ("do_work", "do_work"))

    def testRenameDecoratorForm(self) -> None:
        @rename("do_work")
        def work():
            pass

        self.assertEqual(work.__name__, "do_work")

    def testRenameArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(len, "length")  # built-ins are not updatable

    def testMirrorIsReadOnly(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        with self.assertRaises(AttributeError):
            holder.items = []


if __name__ == "__main__":
    unittest.main()
