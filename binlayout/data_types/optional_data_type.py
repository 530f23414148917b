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

from __future__ import annotations

from types import NoneType, UnionType
from typing import TypeVar, Union, get_args, get_origin

from typing_extensions import Self, override

from binlayout.data_types.data_type import DataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.compound_encoding.optional import decode_optional, encode_optional
from binlayout.serialization.exceptions import SerializationTypeError

V = TypeVar('V')


class OptionalDataType(DataType[V | None]):
    """ Represents a data type that is either `V` or `None`.
    """

    __slots__ = ('_value',)

    _value: DataType[V]

    def __init__(self, data_type: DataType[V]) -> None:
        self._value = data_type

    @override
    @classmethod
    def _from_type(cls, type_: type[V | None], /, *, type_map: DataType.TypeMap) -> Self:
        if get_origin(type_) not in (Union, UnionType):
            raise SerializationTypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if len(args) != 2 or NoneType not in args:
            raise SerializationTypeError('type must be either `None | T` or `T | None`')
        not_none_type, = tuple(set(args) - {NoneType})  # get the type that is not None
        return cls(DataType.from_type(not_none_type, type_map=type_map))

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            return
        self._value._check_value(value, deep=deep)

    @override
    def _size_hint(self, value: V | None, /) -> int:
        if value is None:
            return 1
        return 1 + self._value.size_hint(value)

    @override
    def _serialize(self, serializer: Serializer, value: V | None, /) -> None:
        encode_optional(serializer, value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> V | None:
        return decode_optional(deserializer, self._value.deserialize)
