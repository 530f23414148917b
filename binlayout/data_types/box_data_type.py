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

from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from binlayout.data_types.data_type import DataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.exceptions import SerializationTypeError
from binlayout.types import Box

T = TypeVar('T')


class BoxDataType(DataType[Box[T]]):
    """ Represents `Box[T]` values, fully transparent: the box itself adds no bytes, everything is delegated to `T`.
    """

    __slots__ = ('_fixed_size', '_inner')

    _inner: DataType[T]

    def __init__(self, inner: DataType[T], /) -> None:
        self._inner = inner
        self._fixed_size = inner.fixed_size()

    @override
    @classmethod
    def _from_type(cls, type_: type[Box[T]], /, *, type_map: DataType.TypeMap) -> Self:
        if get_origin(type_) is not Box:
            raise SerializationTypeError('expected Box[<type>]')
        inner_type, = get_args(type_)
        return cls(DataType.from_type(inner_type, type_map=type_map))

    @override
    def _check_value(self, value: Box[T], /, *, deep: bool) -> None:
        if not isinstance(value, Box):
            raise SerializationTypeError('expected Box instance')
        self._inner._check_value(value.value, deep=deep)

    @override
    def _size_hint(self, value: Box[T], /) -> int:
        return self._inner.size_hint(value.value)

    @override
    def _serialize(self, serializer: Serializer, value: Box[T], /) -> None:
        self._inner.serialize(serializer, value.value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Box[T]:
        return Box(self._inner.deserialize(deserializer))
