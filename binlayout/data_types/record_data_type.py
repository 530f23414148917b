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

from typing import Any, Optional, get_args, get_origin

from typing_extensions import Self, override

from binlayout.data_types.data_type import DataType
from binlayout.data_types.sized_number_data_type import SizedIntDataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.compound_encoding.record import (
    decode_record_collection,
    decode_record_text,
    encode_record_collection,
    encode_record_text,
)
from binlayout.serialization.exceptions import SerializationTypeError
from binlayout.types import Record


class RecordDataType(DataType[Record]):
    """ Represents `Record[L, str]` and `Record[L, list[T]]` values.

    The payload is encoded like a `str` or a `list[T]` would be, except that the length prefix is the fixed-width
    unsigned integer `L` instead of the active Lencoder. A payload too long for `L` is never truncated, encoding it
    raises `TooLongError`.
    """

    __slots__ = ('_length', '_item')

    _length: SizedIntDataType
    # `None` for text payloads
    _item: Optional[DataType]

    def __init__(self, length: SizedIntDataType, item: Optional[DataType] = None) -> None:
        if length.signed:
            raise SerializationTypeError('the length of a Record must be unsigned')
        self._length = length
        self._item = item

    @override
    @classmethod
    def _from_type(cls, type_: type[Record], /, *, type_map: DataType.TypeMap) -> Self:
        if get_origin(type_) is not Record:
            raise SerializationTypeError('expected Record[<length>, <payload>]')
        length_type, payload_type = get_args(type_)
        length = DataType.from_type(length_type, type_map=type_map)
        if not isinstance(length, SizedIntDataType):
            raise SerializationTypeError(f'{length_type} cannot be used as a Record length')
        if payload_type is str:
            return cls(length)
        if get_origin(payload_type) is list:
            item_type, = get_args(payload_type)
            return cls(length, DataType.from_type(item_type, type_map=type_map))
        raise SerializationTypeError('the payload of a Record must be either str or list[<type>]')

    @override
    def _check_value(self, value: Record, /, *, deep: bool) -> None:
        if not isinstance(value, Record):
            raise SerializationTypeError('expected Record instance')
        payload: Any = value.data
        if self._item is None:
            if not isinstance(payload, str):
                raise SerializationTypeError('expected str payload')
            return
        if not isinstance(payload, list):
            raise SerializationTypeError('expected list payload')
        if deep:
            for i in payload:
                self._item._check_value(i, deep=True)

    @override
    def _size_hint(self, value: Record, /) -> int:
        if self._item is None:
            return self._length.byte_size + len(value.data.encode('utf-8'))
        return self._length.byte_size + sum(self._item.size_hint(i) for i in value.data)

    @override
    def _serialize(self, serializer: Serializer, value: Record, /) -> None:
        length = self._length.byte_size
        byteorder = self._length.byteorder
        if self._item is None:
            encode_record_text(serializer, value.data, length=length, byteorder=byteorder)
        else:
            encode_record_collection(serializer, value.data, self._item.serialize, length=length, byteorder=byteorder)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Record:
        length = self._length.byte_size
        byteorder = self._length.byteorder
        if self._item is None:
            return Record(decode_record_text(deserializer, length=length, byteorder=byteorder))
        return Record(decode_record_collection(
            deserializer,
            self._item.deserialize,
            list,
            length=length,
            byteorder=byteorder,
        ))
