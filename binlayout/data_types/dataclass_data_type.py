# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Data type for dataclasses, it is what lets composite record types be declared as plain Python classes:

>>> from dataclasses import dataclass
>>> from binlayout.types import U8
>>> @dataclass
... class Student:
...     age: U8
...     name: str
...     gender: bool
...     roll: U8
>>> from binlayout.data_types import make_data_type
>>> student_data_type = make_data_type(Student)
>>> data = student_data_type.to_bytes(Student(21, 'John', True, 73))
>>> data.hex()
'15044a6f686e0149'
>>> student_data_type.from_bytes(data)
Student(age=21, name='John', gender=True, roll=73)

Fields are laid out in declaration order with nothing in between, no count and no field tags.
"""

from dataclasses import fields, is_dataclass
from typing import TYPE_CHECKING, Any, TypeVar, get_type_hints

from typing_extensions import Self, override

from binlayout.data_types.data_type import DataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.exceptions import SerializationTypeError

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

D = TypeVar('D', bound='DataclassInstance')


class DataclassDataType(DataType[D]):
    __slots__ = ('_fixed_size', '_fields', '_class')
    _fields: dict[str, DataType]
    _class: type[D]

    def __init__(self, fields_: dict[str, DataType], class_: type[D]):
        self._fields = fields_
        self._class = class_
        sizes = [field_data_type.fixed_size() for field_data_type in fields_.values()]
        self._fixed_size = None if None in sizes else sum(sizes)  # type: ignore[arg-type]

    @override
    @classmethod
    def _from_type(cls, type_: type[D], /, *, type_map: DataType.TypeMap) -> Self:
        if not is_dataclass(type_):
            raise SerializationTypeError('expected a dataclass')
        # XXX: resolves annotations written as strings, which is the case with `from __future__ import annotations`
        hints = get_type_hints(type_)
        # XXX: the order is important, but `dict` and `fields` should have a stable order
        values: dict[str, DataType] = {}
        for field in fields(type_):
            values[field.name] = DataType.from_type(hints[field.name], type_map=type_map)
        return cls(values, type_)

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise SerializationTypeError(f'expected {self._class} instance')
        if deep:
            for field_name, field_data_type in self._fields.items():
                field_data_type._check_value(getattr(value, field_name), deep=True)

    @override
    def _size_hint(self, value: D, /) -> int:
        return sum(
            field_data_type.size_hint(getattr(value, field_name))
            for field_name, field_data_type in self._fields.items()
        )

    @override
    def _serialize(self, serializer: Serializer, value: D, /) -> None:
        for field_name, field_data_type in self._fields.items():
            field_data_type.serialize(serializer, getattr(value, field_name))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> D:
        kwargs: dict[str, Any] = {}
        for field_name, field_data_type in self._fields.items():
            kwargs[field_name] = field_data_type.deserialize(deserializer)
        return self._class(**kwargs)
