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

from typing_extensions import Self, override

from binlayout.conf.get_settings import get_global_settings
from binlayout.data_types.data_type import DataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.encoding.bytes import decode_bytes, decode_bytes_view, encode_bytes
from binlayout.serialization.encoding.lencoder import get_lencoder
from binlayout.serialization.exceptions import SerializationTypeError


class BytesDataType(DataType[bytes]):
    """ Represents builtin `bytes` values, decoding makes a copy of the input.
    """

    @override
    @classmethod
    def _from_type(cls, type_: type[bytes], /, *, type_map: DataType.TypeMap) -> Self:
        if type_ is not bytes:
            raise SerializationTypeError('expected bytes type')
        return cls()

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise SerializationTypeError('expected bytes instance')

    @override
    def _size_hint(self, value: bytes, /) -> int:
        return get_lencoder().size_of(len(value)) + len(value)

    @override
    def _serialize(self, serializer: Serializer, value: bytes, /) -> None:
        max_bytes = get_global_settings().MAX_BYTES_LENGTH
        encode_bytes(serializer.with_optional_max_bytes(max_bytes), value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bytes:
        max_bytes = get_global_settings().MAX_BYTES_LENGTH
        return decode_bytes(deserializer.with_optional_max_bytes(max_bytes))


class BytesViewDataType(DataType[memoryview]):
    """ Represents `memoryview` values, decoding does not copy, the result is a view of the input.

    The view keeps the whole input buffer alive, and any change to a mutable input is seen through it.
    """

    @override
    @classmethod
    def _from_type(cls, type_: type[memoryview], /, *, type_map: DataType.TypeMap) -> Self:
        if type_ is not memoryview:
            raise SerializationTypeError('expected memoryview type')
        return cls()

    @override
    def _check_value(self, value: memoryview, /, *, deep: bool) -> None:
        if not isinstance(value, (memoryview, bytes, bytearray)):
            raise SerializationTypeError('expected memoryview instance')

    @override
    def _size_hint(self, value: memoryview, /) -> int:
        nbytes = memoryview(value).nbytes
        return get_lencoder().size_of(nbytes) + nbytes

    @override
    def _serialize(self, serializer: Serializer, value: memoryview, /) -> None:
        max_bytes = get_global_settings().MAX_BYTES_LENGTH
        encode_bytes(serializer.with_optional_max_bytes(max_bytes), value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> memoryview:
        max_bytes = get_global_settings().MAX_BYTES_LENGTH
        return decode_bytes_view(deserializer.with_optional_max_bytes(max_bytes))
