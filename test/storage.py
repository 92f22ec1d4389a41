"""
Storage handle tests (Ref, Attr, Item) and the storage protocol check.
"""
import unittest
from types import SimpleNamespace
from unittest import TestCase

from argbind.storage import Ref, Attr, Item, is_storage
from argbind.utils import Unset


class TestRef(TestCase):
    def testDefaultsToUnset(self):
        self.assertIs(Ref().get(), Unset)

    def testGetSet(self):
        ref = Ref(1)
        ref.set(2)
        self.assertEqual(ref.get(), 2)
        self.assertEqual(ref.value, 2)

    def testRepr(self):
        self.assertEqual(repr(Ref("x")), "Ref('x')")


class TestAttr(TestCase):
    def testWritesThroughToTarget(self):
        namespace = SimpleNamespace(count=0)
        handle = Attr(namespace, "count")
        handle.set(5)
        self.assertEqual(namespace.count, 5)
        self.assertEqual(handle.get(), 5)

    def testMissingAttributeReadsUnset(self):
        self.assertIs(Attr(SimpleNamespace(), "missing").get(), Unset)

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Attr(SimpleNamespace(), 1)


class TestItem(TestCase):
    def testWritesThroughToMapping(self):
        values = {}
        handle = Item(values, "path")
        self.assertIs(handle.get(), Unset)
        handle.set("a.txt")
        self.assertEqual(values, {"path": "a.txt"})

    def testTargetMustBeMutable(self):
        with self.assertRaises(TypeError):
            Item(("immutable",), 0)


class TestProtocol(TestCase):
    def testShippedHandlesAreStorage(self):
        self.assertTrue(is_storage(Ref()))
        self.assertTrue(is_storage(Attr(SimpleNamespace(), "x")))
        self.assertTrue(is_storage(Item({}, "x")))

    def testCustomStorage(self):
        class Cell:
            def get(self):
                return 0

            def set(self, value):
                pass

        self.assertTrue(is_storage(Cell()))

    def testPlainValuesAreNotStorage(self):
        for value in (0, "text", [], {}, object()):
            with self.subTest(value=value):
                self.assertFalse(is_storage(value))


if __name__ == "__main__":
    unittest.main()
