from dataclasses import dataclass
from typing import Optional

from typing_extensions import Self, override

from binlayout.data_types import DataclassDataType, DataType, make_data_type
from binlayout.serialization import Deserializer, SerializationError, SerializationTypeError, Serializer
from binlayout.serialization.compound_encoding.record import decode_record_text, encode_record_text
from binlayout.serialization.encoding.int import decode_int, encode_int
from binlayout.types import U8, Record
from binlayout_tests import unittest


@dataclass(frozen=True)
class Subject:
    code: int
    # only subjects without a well-known code have a name
    name: Optional[str] = None


MATH = Subject(302)
PHYSICS = Subject(317)
CHEMISTRY = Subject(345)

_KNOWN_SUBJECTS = {subject.code: subject for subject in (MATH, PHYSICS, CHEMISTRY)}


class SubjectDataType(DataType[Subject]):
    """ Known subjects are encoded as their 2-byte code, other subjects are followed by their name as a U8 record.
    """

    @override
    @classmethod
    def _from_type(cls, type_: type[Subject], /, *, type_map: DataType.TypeMap) -> Self:
        if type_ is not Subject:
            raise SerializationTypeError('expected Subject type')
        return cls()

    @override
    def _check_value(self, value: Subject, /, *, deep: bool) -> None:
        if not isinstance(value, Subject):
            raise SerializationTypeError('expected Subject instance')

    @override
    def _size_hint(self, value: Subject, /) -> int:
        if value.code in _KNOWN_SUBJECTS:
            return 2
        assert value.name is not None
        return 2 + 1 + len(value.name.encode('utf-8'))

    @override
    def _serialize(self, serializer: Serializer, value: Subject, /) -> None:
        encode_int(serializer, value.code, length=2, signed=False)
        if value.code not in _KNOWN_SUBJECTS:
            assert value.name is not None
            encode_record_text(serializer, value.name, length=1)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Subject:
        code = decode_int(deserializer, length=2, signed=False)
        if code in _KNOWN_SUBJECTS:
            return _KNOWN_SUBJECTS[code]
        return Subject(code, decode_record_text(deserializer, length=1))


@dataclass
class Student:
    age: U8
    name: str
    gender: bool
    roll: U8


@dataclass
class Class:
    name: str
    subjects: tuple[Subject, Subject, Subject, Subject]
    students: Record[U8, list[Student]]


class CompositeTestCase(unittest.TestCase):
    def _make_class(self) -> Class:
        return Class(
            name='Mango',
            subjects=(PHYSICS, CHEMISTRY, Subject(321, 'Engish II'), MATH),
            students=Record([
                Student(age=21, name='John', gender=True, roll=73),
                Student(age=20, name='Jui', gender=False, roll=36),
            ]),
        )

    def test_class_round_trip(self) -> None:
        data_type = make_data_type(Class, extra_data_types_map={Subject: SubjectDataType})
        self.assertIsInstance(data_type, DataclassDataType)
        old_class = self._make_class()

        serializer = Serializer.build_bytes_serializer()
        data_type.serialize(serializer, old_class)
        self.assertEqual(serializer.cur_pos(), 40)  # 40 bytes written
        data = bytes(serializer.finalize())

        deserializer = Deserializer.build_bytes_deserializer(data)
        new_class = data_type.deserialize(deserializer)
        self.assertEqual(deserializer.cur_pos(), 40)  # 40 bytes read
        deserializer.finalize()

        self.assertEqual(old_class, new_class)
        self.assertEqual(data_type.size_hint(old_class), 40)

    def test_class_layout(self) -> None:
        data_type = make_data_type(Class, extra_data_types_map={Subject: SubjectDataType})
        data = data_type.to_bytes(self._make_class())
        # name
        self.assertEqual(data[:6], b'\x05Mango')
        # subjects, the custom one has its name after the code
        self.assertEqual(data[6:10], (317).to_bytes(2, 'little') + (345).to_bytes(2, 'little'))
        self.assertEqual(data[10:22], (321).to_bytes(2, 'little') + b'\x09Engish II')
        self.assertEqual(data[22:24], (302).to_bytes(2, 'little'))
        # students, the count is a single byte
        self.assertEqual(data[24], 2)
        self.assertEqual(data[25:33], b'\x15\x04John\x01\x49')
        self.assertEqual(data[33:], b'\x14\x03Jui\x00\x24')

    def test_class_truncated(self) -> None:
        data_type = make_data_type(Class, extra_data_types_map={Subject: SubjectDataType})
        data = data_type.to_bytes(self._make_class())
        for size in range(len(data)):
            with self.assertRaises(SerializationError):
                data_type.from_bytes(data[:size])

    def test_subject_default_encoding(self) -> None:
        # without the extra map Subject is a plain dataclass: an I64 code and an optional name
        data_type = make_data_type(Class)
        old_class = self._make_class()
        data = data_type.to_bytes(old_class)
        self.assertEqual(len(data), 6 + (3 * 9 + 8 + 1 + 10) + 16)
        self.assertEqual(data[6:15], (317).to_bytes(8, 'little') + b'\x00')
        self.assertEqual(data_type.from_bytes(data), old_class)

        custom = make_data_type(Class, extra_data_types_map={Subject: SubjectDataType})
        self.assertEqual(len(custom.to_bytes(old_class)), 40)

    def test_dataclass_fixed_size(self) -> None:
        @dataclass
        class Point:
            x: U8
            y: U8

        self.assertEqual(make_data_type(Point).fixed_size(), 2)
        self.assertIsNone(make_data_type(Student).fixed_size())
        self.assertRoundTrip(Point, Point(1, 2), size=2)

    def test_dataclass_value_mismatch(self) -> None:
        with self.assertRaises(SerializationTypeError):
            make_data_type(Student).to_bytes(Class('x', (), Record([])))  # type: ignore[arg-type]
