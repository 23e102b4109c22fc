"""
Argument model tests.

Scope
- Validate the four kinds (Signal, Boolean, Value, Sink): construction, normalization,
  shared accessors and kind-specific properties.
- Validate name rules (single-character short names, named kinds need a name, operands
  and sinks cannot have one) and text/required/dest type checks.
- Validate default handling: codec resolution, captured default text, sink collections.
- Validate that the set of kinds is closed.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from slimargs import *
from slimargs.utils import Unset


class TestSignal(TestCase):

    def testAccessors(self):
        s = Signal("h", "help", "Show help.")
        self.assertEqual((s.short_name, s.long_name, s.descr), ("h", "help", "Show help."))
        self.assertFalse(s.required)
        self.assertFalse(s.has_value)
        self.assertFalse(s.is_sink)
        self.assertEqual(s.default_text, "")

    def testEmptyNamesBecomeNone(self):
        s = Signal("", "version")
        self.assertIsNone(s.short_name)

    def testNameRequired(self):
        with self.assertRaises(TypeError):
            Signal()
        with self.assertRaises(TypeError):
            Signal("", "")

    def testShortNameSingleCharacter(self):
        with self.assertRaises(ValueError):
            Signal("hh")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Signal(1)
        with self.assertRaises(TypeError):
            Signal("h", 2)

    def testRepr(self):
        self.assertEqual(repr(Signal("h", "help")), "signal(short_name='h', long_name='help')")


class TestBoolean(TestCase):

    def testDefaults(self):
        b = Boolean("v", "verbose")
        self.assertIs(b.default, False)
        self.assertFalse(b.has_value)
        self.assertIs(b.dest, Unset)

    def testRequiredMustBeBool(self):
        with self.assertRaises(TypeError):
            Boolean("v", required=1)

    def testDefaultMustBeBool(self):
        with self.assertRaises(TypeError):
            Boolean("v", default="yes")

    def testDescrMustBeString(self):
        with self.assertRaises(TypeError):
            Boolean("v", descr=None)

    def testDestValidation(self):
        self.assertEqual(Boolean("v", dest=" verbose ").dest, "verbose")
        with self.assertRaises(ValueError):
            Boolean("v", dest="  ")
        with self.assertRaises(TypeError):
            Boolean("v", dest=1)


class TestValue(TestCase):

    def testOption(self):
        v = Value("o", "output", "FILE", "Output file.", type=str, default="out.txt")
        self.assertTrue(v.has_value)
        self.assertFalse(v.is_sink)
        self.assertIs(v.codec, string)
        self.assertEqual(v.default, "out.txt")
        self.assertEqual(v.default_text, '"out.txt"')

    def testOperand(self):
        v = Value(value_name="N", type=int, default=3, named=False)
        self.assertIsNone(v.short_name)
        self.assertIsNone(v.long_name)
        self.assertEqual(v.default_text, "3")

    def testOptionNeedsName(self):
        with self.assertRaises(TypeError):
            Value(value_name="N")

    def testOperandCannotHaveName(self):
        with self.assertRaises(TypeError):
            Value("n", value_name="N", named=False)

    def testNoDefaultHasNoText(self):
        self.assertEqual(Value("o").default_text, "")
        self.assertEqual(Value("o", default=None).default_text, "")
        self.assertIsNone(Value("o").default)

    def testCodecResolvedOnce(self):
        self.assertIs(Value("o", type=uint16).codec, uint16)
        self.assertIsInstance(Value("o", type=float).codec, Generic)

    def testUnsupportedType(self):
        with self.assertRaises(TypeError):
            Value("o", type=3)


class TestSink(TestCase):

    def testAccessors(self):
        s = Sink("FILE", "Files.", True, type=int, default=[1, 2])
        self.assertTrue(s.has_value)
        self.assertTrue(s.is_sink)
        self.assertEqual(s.default, (1, 2))
        self.assertEqual(s.default_text, "")
        self.assertIs(s.codec, integer)

    def testDefaultMustBeCollection(self):
        for default in ("ab", b"ab", 3):
            with self.subTest(default=default):
                with self.assertRaises(TypeError):
                    Sink("FILE", default=default)


class TestClosedSet(TestCase):

    def testKindsAreSealed(self):
        for kind in (Signal, Boolean, Value, Sink):
            with self.subTest(kind=kind):
                with self.assertRaises(TypeError):
                    type("Derived", (kind,), {})

    def testBaseNotExtensible(self):
        with self.assertRaises(TypeError):
            type("Derived", (Argument,), {})

    def testBaseNotInstantiable(self):
        with self.assertRaises(TypeError):
            Argument("a", None, "", "", False, Unset, named=True)

    def testAccessorsAreReadOnly(self):
        with self.assertRaises(AttributeError):
            Signal("h").short_name = "x"


if __name__ == "__main__":
    unittest.main()
