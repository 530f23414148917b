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
from binlayout.serialization.encoding.lencoder import get_lencoder
from binlayout.serialization.encoding.utf8 import decode_utf8, encode_utf8
from binlayout.serialization.exceptions import SerializationTypeError


class StrDataType(DataType[str]):
    """ Represents builtin `str` values.
    """

    @override
    @classmethod
    def _from_type(cls, type_: type[str], /, *, type_map: DataType.TypeMap) -> Self:
        if type_ is not str:
            raise SerializationTypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise SerializationTypeError('expected str type')

    @override
    def _size_hint(self, value: str, /) -> int:
        size = len(value.encode('utf-8'))
        return get_lencoder().size_of(size) + size

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_utf8(serializer.with_optional_max_bytes(get_global_settings().MAX_BYTES_LENGTH), value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return decode_utf8(deserializer.with_optional_max_bytes(get_global_settings().MAX_BYTES_LENGTH))
