from typing import Optional

from binlayout.data_types import (
    BoolDataType,
    BytesDataType,
    BytesViewDataType,
    ListDataType,
    OptionalDataType,
    SizedIntDataType,
    StrDataType,
    TupleDataType,
    make_data_type,
)
from binlayout.serialization import BadDataError, OutOfDataError, SerializationError, SerializationTypeError
from binlayout.types import F32, F64, I8, I16, I64, U8, U16, U16BE, U16LE, U32, U64, Box
from binlayout_tests import unittest
from binlayout_tests.unittest import override_settings


class DataTypeTestCase(unittest.TestCase):
    def test_bool(self) -> None:
        self.assertRoundTrip(bool, True, size=1)
        self.assertRoundTrip(bool, False, size=1)
        self.assertEqual(BoolDataType().fixed_size(), 1)

    def test_invalid_bool(self) -> None:
        with self.assertRaises(BadDataError):
            BoolDataType().from_bytes(b'\x02')
        # BadDataError is also a ValueError
        with self.assertRaises(ValueError):
            BoolDataType().from_bytes(b'\xff')

    def test_sized_ints(self) -> None:
        self.assertRoundTrip(U8, 255, size=1)
        self.assertRoundTrip(U16, 0xFFFF, size=2)
        self.assertRoundTrip(U32, 0xFFFFFFFF, size=4)
        self.assertRoundTrip(U64, 2**64 - 1, size=8)
        self.assertRoundTrip(I8, -128, size=1)
        self.assertRoundTrip(I16, -32768, size=2)
        self.assertRoundTrip(I64, -(2**63), size=8)

    def test_sized_int_fixed_size(self) -> None:
        for type_, size in [(U8, 1), (U16, 2), (U32, 4), (U64, 8), (I8, 1), (I64, 8)]:
            self.assertEqual(make_data_type(type_).fixed_size(), size)

    def test_sized_int_bounds(self) -> None:
        u8 = make_data_type(U8)
        with self.assertRaises(ValueError):
            u8.to_bytes(256)
        with self.assertRaises(ValueError):
            u8.to_bytes(-1)
        i8 = make_data_type(I8)
        with self.assertRaises(ValueError):
            i8.to_bytes(128)
        with self.assertRaises(SerializationTypeError):
            i8.to_bytes(True)

    def test_sized_int_byteorder(self) -> None:
        self.assertEqual(make_data_type(U16LE).to_bytes(0x0102), b'\x02\x01')
        self.assertEqual(make_data_type(U16BE).to_bytes(0x0102), b'\x01\x02')
        # the default byte order comes from the settings
        self.assertEqual(make_data_type(U16).to_bytes(0x0102), b'\x02\x01')
        with override_settings(BYTEORDER='big'):
            self.assertEqual(make_data_type(U16).to_bytes(0x0102), b'\x01\x02')
            # explicit byte orders are not affected
            self.assertEqual(make_data_type(U16LE).to_bytes(0x0102), b'\x02\x01')

    def test_int_is_i64(self) -> None:
        data_type = make_data_type(int)
        self.assertIsInstance(data_type, SizedIntDataType)
        self.assertEqual(data_type.fixed_size(), 8)
        self.assertRoundTrip(int, -100, size=8)
        self.assertRoundTrip(int, 0, size=8)

    def test_floats(self) -> None:
        self.assertRoundTrip(F32, 1.5, size=4)
        self.assertRoundTrip(F64, -0.1, size=8)
        self.assertRoundTrip(float, 3.25, size=8)
        self.assertEqual(make_data_type(F32).to_bytes(1), make_data_type(F32).to_bytes(1.0))

    def test_float_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            make_data_type(F32).to_bytes(1e40)
        # the same value fits in double precision
        self.assertRoundTrip(F64, 1e40, size=8)
        self.assertRoundTrip(F32, float('inf'), size=4)

    def test_truncated_fixed_width(self) -> None:
        with self.assertRaises(OutOfDataError):
            make_data_type(U32).from_bytes(b'\x01\x02\x03')

    def test_trailing_data(self) -> None:
        with self.assertRaises(SerializationError):
            make_data_type(U8).from_bytes(b'\x01\x02')

    def test_str(self) -> None:
        self.assertRoundTrip(str, '', size=1)
        self.assertRoundTrip(str, 'binlayout', size=10)
        self.assertRoundTrip(str, 'áéíóúçãõ', size=17)
        self.assertIsInstance(make_data_type(str), StrDataType)

    def test_str_type_mismatch(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(str).to_bytes(b'foo')  # type: ignore[arg-type]

    def test_bytes(self) -> None:
        self.assertRoundTrip(bytes, b'', size=1)
        self.assertRoundTrip(bytes, b'\x01\x02', size=3)
        self.assertIsInstance(make_data_type(bytes), BytesDataType)
        # bytearray is aliased to bytes
        self.assertIsInstance(make_data_type(bytearray), BytesDataType)

    def test_bytes_decode_copies(self) -> None:
        data = bytearray(b'\x03abc')
        value = make_data_type(bytes).from_bytes(data)
        data[1] = ord('x')
        self.assertEqual(value, b'abc')

    def test_memoryview_decode_is_zero_copy(self) -> None:
        data_type = make_data_type(memoryview)
        self.assertIsInstance(data_type, BytesViewDataType)
        data = bytearray(b'\x03abc')
        value = data_type.from_bytes(data)
        self.assertIsInstance(value, memoryview)
        data[1] = ord('x')
        self.assertEqual(bytes(value), b'xbc')
        self.assertRoundTrip(memoryview, memoryview(b'view'), size=5)

    def test_max_bytes_length(self) -> None:
        from binlayout.serialization.adapters import MaxBytesExceededError
        with override_settings(MAX_BYTES_LENGTH=4):
            self.assertEqual(make_data_type(str).to_bytes('abc'), b'\x03abc')
            with self.assertRaises(MaxBytesExceededError):
                make_data_type(str).to_bytes('abcd')
            with self.assertRaises(MaxBytesExceededError):
                make_data_type(bytes).from_bytes(b'\x04abcd')

    def test_list(self) -> None:
        self.assertRoundTrip(list[str], ['foo', 'π', ''], size=1 + 4 + 3 + 1)
        self.assertRoundTrip(list[U16], [1, 2, 3], size=1 + 6)
        self.assertIsInstance(make_data_type(list[U8]), ListDataType)

    def test_empty_list(self) -> None:
        data = self.assertRoundTrip(list[str], [], size=1)
        self.assertEqual(data, b'\x00')
        self.assertEqual(make_data_type(list[U8]).from_bytes(b'\x00'), [])

    def test_nested_list(self) -> None:
        self.assertRoundTrip(list[list[U8]], [[], [1], [2, 3]], size=1 + 1 + 2 + 3)

    def test_list_prefix_grows(self) -> None:
        self.assertRoundTrip(list[bool], [True] * 127, size=1 + 127)
        self.assertRoundTrip(list[bool], [True] * 128, size=2 + 128)

    def test_list_requires_arg(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(list)

    def test_list_element_failure(self) -> None:
        with self.assertRaises(OutOfDataError):
            make_data_type(list[U16]).from_bytes(b'\x02\x01\x00\x02')
        with self.assertRaises(BadDataError):
            make_data_type(list[bool]).from_bytes(b'\x02\x01\x05')

    def test_list_deep_check(self) -> None:
        data_type = make_data_type(list[U8])
        data_type.check_value([1, 2])
        with self.assertRaises(ValueError):
            data_type.check_value([1, 256])

    def test_fixed_tuple(self) -> None:
        data = self.assertRoundTrip(tuple[U8, str, bool], (1, 'a', True), size=1 + 2 + 1)
        self.assertEqual(data, b'\x01\x01a\x01')
        self.assertIsNone(make_data_type(tuple[U8, str]).fixed_size())
        self.assertEqual(make_data_type(tuple[U8, U16, U16]).fixed_size(), 5)

    def test_fixed_tuple_wrong_size(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(tuple[U8, U8]).to_bytes((1, 2, 3))

    def test_varsize_tuple(self) -> None:
        data_type = make_data_type(tuple[U8, ...])
        self.assertIsInstance(data_type, TupleDataType)
        self.assertIsNone(data_type.fixed_size())
        self.assertRoundTrip(tuple[U8, ...], (1, 2, 3), size=4)
        self.assertRoundTrip(tuple[U8, ...], (), size=1)

    def test_optional(self) -> None:
        self.assertRoundTrip(Optional[str], None, size=1)
        self.assertRoundTrip(Optional[str], 'foo', size=5)
        self.assertRoundTrip(U8 | None, 7, size=2)
        self.assertIsInstance(make_data_type(Optional[U8]), OptionalDataType)

    def test_optional_requires_none(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(U8 | str)

    def test_box_is_transparent(self) -> None:
        for type_, value in [
            (U8, 42),
            (str, 'HelloWorld'),
            (list[U16], [1, 2, 3]),
            (tuple[bool, str], (True, 'x')),
        ]:
            plain = make_data_type(type_).to_bytes(value)
            boxed = self.assertRoundTrip(Box[type_], Box(value))  # type: ignore[valid-type]
            self.assertEqual(plain, boxed)

    def test_box_fixed_size(self) -> None:
        self.assertEqual(make_data_type(Box[U32]).fixed_size(), 4)
        self.assertIsNone(make_data_type(Box[str]).fixed_size())

    def test_nested_box(self) -> None:
        self.assertRoundTrip(Box[Box[U8]], Box(Box(1)), size=1)
        self.assertRoundTrip(list[Box[str]], [Box('a'), Box('b')], size=1 + 2 + 2)

    def test_box_hash(self) -> None:
        self.assertEqual(hash(Box('a')), hash('a'))
        self.assertEqual(len({Box(1), Box(1), Box(Box(1))}), 2)

    def test_unsupported_type(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(dict[str, str])
        with self.assertRaises(SerializationTypeError):
            make_data_type(set[U8])

    def test_size_hint(self) -> None:
        self.assertEqual(make_data_type(U32).size_hint(1), 4)
        self.assertEqual(make_data_type(str).size_hint('π'), 3)
        self.assertEqual(make_data_type(list[str]).size_hint(['a'] * 200), 2 + 200 * 2)
        self.assertEqual(make_data_type(Optional[U16]).size_hint(None), 1)

    def test_l3_active(self) -> None:
        with override_settings(LENCODER='L3'):
            data = self.assertRoundTrip(bytes, b'x' * 0xC0DE, size=3 + 0xC0DE)
            self.assertEqual(data[0] >> 6, 0b11)
            self.assertRoundTrip(list[bool], [False] * 16384, size=3 + 16384)
