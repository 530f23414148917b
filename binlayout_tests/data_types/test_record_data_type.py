from dataclasses import dataclass

from binlayout.data_types import RecordDataType, make_data_type
from binlayout.serialization import OutOfDataError, SerializationTypeError, TooLongError, Utf8Error
from binlayout.types import I16, U8, U16BE, U16LE, U32, Record
from binlayout_tests import unittest


class RecordDataTypeTestCase(unittest.TestCase):
    def test_record_u8_str(self) -> None:
        data = self.assertRoundTrip(Record[U8, str], Record('HelloWorld'), size=11)
        self.assertEqual(data, b'\x0aHelloWorld')
        self.assertIsInstance(make_data_type(Record[U8, str]), RecordDataType)

    def test_record_u8_too_long(self) -> None:
        data_type = make_data_type(Record[U8, str])
        self.assertEqual(len(data_type.to_bytes(Record('x' * 255))), 256)
        with self.assertRaises(TooLongError):
            data_type.to_bytes(Record('x' * 256))

    def test_record_length_counts_utf8_bytes(self) -> None:
        data = self.assertRoundTrip(Record[U8, str], Record('ππ'), size=5)
        self.assertEqual(data[0], 4)
        self.assertEqual(len(Record('ππ')), data[0])

    def test_record_byteorder(self) -> None:
        self.assertEqual(make_data_type(Record[U16BE, str]).to_bytes(Record('ab')), b'\x00\x02ab')
        self.assertEqual(make_data_type(Record[U16LE, str]).to_bytes(Record('ab')), b'\x02\x00ab')

    def test_record_list(self) -> None:
        data = self.assertRoundTrip(Record[U32, list[str]], Record(['a', 'bc']), size=4 + 2 + 3)
        self.assertEqual(data[:4], b'\x02\x00\x00\x00')
        self.assertRoundTrip(Record[U8, list[U8]], Record([]), size=1)

    def test_record_list_too_long(self) -> None:
        with self.assertRaises(TooLongError):
            make_data_type(Record[U8, list[bool]]).to_bytes(Record([True] * 256))

    def test_record_differs_from_default_prefix(self) -> None:
        # 200 needs 2 bytes as a Lencoder value but a single U8
        value = 'x' * 200
        self.assertEqual(len(make_data_type(str).to_bytes(value)), 202)
        self.assertEqual(len(make_data_type(Record[U8, str]).to_bytes(Record(value))), 201)

    def test_record_decode_errors(self) -> None:
        data_type = make_data_type(Record[U8, str])
        with self.assertRaises(OutOfDataError):
            data_type.from_bytes(b'\x05abc')
        with self.assertRaises(Utf8Error):
            data_type.from_bytes(b'\x01\xff')

    def test_record_signed_length(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(Record[I16, str])

    def test_record_invalid_length_type(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(Record[str, str])

    def test_record_invalid_payload(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(Record[U8, bytes])

    def test_record_value_mismatch(self) -> None:
        data_type = make_data_type(Record[U8, str])
        with self.assertRaises(SerializationTypeError):
            data_type.to_bytes('HelloWorld')  # type: ignore[arg-type]
        with self.assertRaises(SerializationTypeError):
            data_type.to_bytes(Record(['HelloWorld']))

    def test_record_is_transparent(self) -> None:
        record = Record[U8, list[U8]]([1, 2, 3])
        self.assertEqual(len(record), 3)
        self.assertEqual(list(record), [1, 2, 3])
        self.assertEqual(record[1], 2)
        self.assertEqual(record, Record([1, 2, 3]))

    def test_record_hash(self) -> None:
        @dataclass(frozen=True)
        class Greeting:
            text: Record[U8, str]

        self.assertEqual(hash(Greeting(Record('x'))), hash(Greeting(Record('x'))))
        self.assertEqual(len({Record('x'), Record('x'), Record('y')}), 2)
        with self.assertRaises(TypeError):
            hash(Record([1, 2]))
