"""
Value codec tests.

Scope
- Integer codecs: range edges for every fixed width, hexadecimal syntax, decimal-only
  leading zeros, unsigned rejection of '-', whitespace handling.
- Generic codecs: float syntax accepted by the builtin, rejections, enums.
- Codec adapters built from plain functions.
- resolve(): mapping of builtin types, codecs and callables.
- encode(): rendering used by help defaults.

Conventions
- Test method names follow CamelCase per project convention.
"""
import enum
import unittest
from unittest import TestCase

from slimargs import *


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


class TestIntegerRanges(TestCase):
    """Each fixed-width codec accepts its limits and rejects one past them."""

    RANGES = (
        (int8, -128, 127),
        (int16, -32768, 32767),
        (int32, -2147483648, 2147483647),
        (int64, -9223372036854775808, 9223372036854775807),
        (uint8, 0, 255),
        (uint16, 0, 65535),
        (uint32, 0, 4294967295),
        (uint64, 0, 18446744073709551615),
    )

    def testLimitsAccepted(self):
        for codec, minimum, maximum in self.RANGES:
            with self.subTest(codec=codec):
                self.assertEqual(codec.decode(str(minimum)), minimum)
                self.assertEqual(codec.decode(str(maximum)), maximum)

    def testEncodeDecodeRoundTrip(self):
        for codec, minimum, maximum in self.RANGES:
            with self.subTest(codec=codec):
                for value in (minimum, maximum):
                    self.assertEqual(codec.decode(codec.encode(value)), value)

    def testOverflowRejected(self):
        for codec, _, maximum in self.RANGES:
            with self.subTest(codec=codec):
                with self.assertRaises(ConversionError) as context:
                    codec.decode(str(maximum + 1))
                self.assertEqual(str(context.exception), f"Cannot parse integer: {maximum + 1}")

    def testSignedUnderflowRejected(self):
        for codec, minimum, _ in self.RANGES[:4]:
            with self.subTest(codec=codec):
                with self.assertRaises(ConversionError):
                    codec.decode(str(minimum - 1))

    def testUnsignedRejectsMinus(self):
        for codec, _, _ in self.RANGES[4:]:
            with self.subTest(codec=codec):
                with self.assertRaises(ConversionError) as context:
                    codec.decode("-1")
                self.assertEqual(str(context.exception), "Cannot parse unsigned integer: -1")
                self.assertEqual(context.exception.code, FaultCode.CANNOT_PARSE_UNSIGNED)

    def testUnsignedRejectsNegativeZero(self):
        with self.assertRaises(ConversionError):
            uint32.decode("-0")

    def testUnboundedInteger(self):
        self.assertEqual(integer.decode("123456789012345678901234567890"), 123456789012345678901234567890)
        self.assertEqual(integer.decode("-5"), -5)


class TestIntegerSyntax(TestCase):

    def testLeadingWhitespaceAccepted(self):
        self.assertEqual(int32.decode(" -2"), -2)
        self.assertEqual(int32.decode("\t7"), 7)

    def testTrailingContentRejected(self):
        for text in ("2 ", "12x", "1.0", "foo", "", "+", "-"):
            with self.subTest(text=text):
                with self.assertRaises(ConversionError) as context:
                    int32.decode(text)
                self.assertEqual(str(context.exception), "Cannot parse integer: " + text)
                self.assertEqual(context.exception.code, FaultCode.CANNOT_PARSE_INTEGER)

    def testExplicitPlusSign(self):
        self.assertEqual(int8.decode("+12"), 12)

    def testLeadingZeroIsDecimal(self):
        self.assertEqual(int32.decode("09"), 9)
        self.assertEqual(int32.decode("010"), 10)

    def testHexadecimalCaseInsensitive(self):
        self.assertEqual(int32.decode("0XABCDEF"), 11259375)
        self.assertEqual(int32.decode("0xabcdef"), 11259375)
        self.assertEqual(int32.decode("0x00000000"), 0)

    def testHexadecimalLimits(self):
        self.assertEqual(int32.decode("-0x80000000"), -2147483648)
        self.assertEqual(int32.decode("0x7fffffff"), 2147483647)
        with self.assertRaises(ConversionError):
            int32.decode("-0x80000001")
        with self.assertRaises(ConversionError):
            int32.decode("0x80000000")

    def testHexadecimalNeedsMarkerAndDigits(self):
        for text in ("ff", "0x", "0xG"):
            with self.subTest(text=text):
                with self.assertRaises(ConversionError):
                    int32.decode(text)

    def testSmallHexadecimal(self):
        self.assertEqual(int8.decode("0x1f"), 31)

    def testBooleanCodec(self):
        self.assertIs(boolean.decode("1"), True)
        self.assertIs(boolean.decode("0"), False)
        with self.assertRaises(ConversionError):
            boolean.decode("2")
        with self.assertRaises(ConversionError):
            boolean.decode("true")

    def testIntegerEncode(self):
        self.assertEqual(int8.encode(-128), "-128")
        self.assertEqual(uint64.encode(18446744073709551615), "18446744073709551615")
        self.assertEqual(boolean.encode(True), "1")

    def testInvalidBitsRejected(self):
        with self.assertRaises(ValueError):
            Integer(0)


class TestGeneric(TestCase):

    def setUp(self):
        self.codec = resolve(float)

    def testFloatSyntax(self):
        cases = {
            "0.0": 0.0,
            "-1000000.0": -1000000.0,
            "1": 1.0,
            "2.": 2.0,
            ".5": 0.5,
            "1e6": 1000000.0,
            "1E6": 1000000.0,
            "-1e+6": -1000000.0,
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(self.codec.decode(text), expected)

    def testFloatScientificSmall(self):
        self.assertAlmostEqual(self.codec.decode("1.0e-6"), 0.000001)
        self.assertAlmostEqual(self.codec.decode("-1e-6"), -0.000001)

    def testFloatTrailingWhitespaceTrimmed(self):
        self.assertEqual(self.codec.decode("2.5 \t"), 2.5)

    def testFloatRejections(self):
        for text in ("", "   ", "1.-", "e1", "1e"):
            with self.subTest(text=text):
                with self.assertRaises(ConversionError) as context:
                    self.codec.decode(text)
                self.assertEqual(str(context.exception), "Cannot parse value: " + text)
                self.assertEqual(context.exception.code, FaultCode.CANNOT_PARSE_VALUE)

    def testFloatLiteralsOfTheType(self):
        self.assertEqual(self.codec.decode("1_000"), 1000.0)
        self.assertEqual(self.codec.decode("inf"), float("inf"))
        self.assertEqual(self.codec.decode("-Infinity"), float("-inf"))
        self.assertNotEqual(self.codec.decode("nan"), self.codec.decode("nan"))

    def testFloatEncode(self):
        self.assertEqual(self.codec.encode(0.5), "0.5")
        self.assertEqual(self.codec.encode(0.0), "0.0")

    def testEnumByValue(self):
        codec = resolve(Color)
        self.assertIs(codec.decode("red"), Color.RED)
        with self.assertRaises(ConversionError):
            codec.decode("green")

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            Generic(42)


class TestCodec(TestCase):

    def setUp(self):
        self.yesno = Codec({"yes": True, "no": False}.__getitem__, lambda value: "yes" if value else "no")

    def testDecode(self):
        self.assertIs(self.yesno.decode("yes"), True)
        self.assertIs(self.yesno.decode("no"), False)

    def testDecodeFailureWrapped(self):
        with self.assertRaises(ConversionError) as context:
            self.yesno.decode("ja")
        self.assertEqual(str(context.exception), "Cannot parse value: ja")

    def testEncode(self):
        self.assertEqual(self.yesno.encode(False), "no")

    def testEncodeMustBeCallable(self):
        with self.assertRaises(TypeError):
            Codec(str, "not callable")


class TestResolve(TestCase):

    def testBuiltinTypes(self):
        self.assertIs(resolve(bool), boolean)
        self.assertIs(resolve(int), integer)
        self.assertIs(resolve(str), string)

    def testCodecReturnedUnchanged(self):
        self.assertIs(resolve(uint16), uint16)
        codec = Codec(int)
        self.assertIs(resolve(codec), codec)
        self.assertIsInstance(codec, TextCodec)

    def testCallableWrapped(self):
        self.assertIsInstance(resolve(float), Generic)

    def testClassWithCodecMethodsIsConstructed(self):
        # A class exposing decode/encode is still a type to call, not a codec instance.
        self.assertIsInstance(resolve(Integer), Generic)

    def testUnsupportedRejected(self):
        with self.assertRaises(TypeError):
            resolve(42)

    def testOneShotHelpers(self):
        self.assertEqual(decode(int8, "0x10"), 16)
        self.assertEqual(encode(str, "hello"), '"hello"')
        self.assertEqual(encode(str, ""), '""')

    def testStringIsIdentity(self):
        for text in ("", " \ts", "s\t ", "s \t s", "-"):
            with self.subTest(text=text):
                self.assertEqual(string.decode(text), text)


if __name__ == "__main__":
    unittest.main()
