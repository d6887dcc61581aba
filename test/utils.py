"""
Utilities tests (Unset sentinel, coalesce, mirror, rename, pluralize).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from framy.utils import Unset, UnsetType, coalesce, mirror, rename, pluralize


class TestUnset(TestCase):
    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))


class TestHelpers(TestCase):
    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, 2]

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        with self.assertRaises(AttributeError):
            holder.items = ()  # type: ignore[misc]

    def testRename(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "x")

    def testPluralize(self):
        self.assertEqual(pluralize("argument", 1), "1 argument")
        self.assertEqual(pluralize("argument", 0), "0 arguments")
        self.assertEqual(pluralize("option", 2), "2 options")
        self.assertEqual(pluralize("box", 2), "2 boxes")


if __name__ == "__main__":
    unittest.main()
