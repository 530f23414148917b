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

from typing import Any, NamedTuple

from typing_extensions import Self, override

from binlayout.data_types.data_type import DataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.encoding.float import decode_float, encode_float
from binlayout.serialization.encoding.int import ByteOrder, decode_int, encode_int
from binlayout.serialization.exceptions import SerializationTypeError
from binlayout.types import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    U8,
    U16,
    U16BE,
    U16LE,
    U32,
    U32BE,
    U32LE,
    U64,
    U64BE,
    U64LE,
)


class _IntLayout(NamedTuple):
    byte_size: int
    signed: bool
    # `None` means the `BYTEORDER` setting is used
    byteorder: ByteOrder | None


SIZED_INT_LAYOUTS: dict[Any, _IntLayout] = {
    U8: _IntLayout(1, False, None),
    U16: _IntLayout(2, False, None),
    U32: _IntLayout(4, False, None),
    U64: _IntLayout(8, False, None),
    U16LE: _IntLayout(2, False, 'little'),
    U32LE: _IntLayout(4, False, 'little'),
    U64LE: _IntLayout(8, False, 'little'),
    U16BE: _IntLayout(2, False, 'big'),
    U32BE: _IntLayout(4, False, 'big'),
    U64BE: _IntLayout(8, False, 'big'),
    I8: _IntLayout(1, True, None),
    I16: _IntLayout(2, True, None),
    I32: _IntLayout(4, True, None),
    I64: _IntLayout(8, True, None),
}

FLOAT_SIZES: dict[Any, int] = {
    F32: 4,
    F64: 8,
}


class SizedIntDataType(DataType[int]):
    """ Represents builtin `int` values with a fixed size, signedness and byte order.
    """

    __slots__ = ('_fixed_size', '_signed', '_byteorder')

    _fixed_size: int
    _signed: bool
    _byteorder: ByteOrder | None

    def __init__(self, byte_size: int, *, signed: bool, byteorder: ByteOrder | None = None) -> None:
        self._fixed_size = byte_size
        self._signed = signed
        self._byteorder = byteorder

    @property
    def byte_size(self) -> int:
        return self._fixed_size

    @property
    def signed(self) -> bool:
        return self._signed

    @property
    def byteorder(self) -> ByteOrder | None:
        return self._byteorder

    def _upper_bound_value(self) -> int:
        if self._signed:
            return 2**(self._fixed_size * 8 - 1) - 1
        else:
            return 2**(self._fixed_size * 8) - 1

    def _lower_bound_value(self) -> int:
        if self._signed:
            return -(2**(self._fixed_size * 8 - 1))
        else:
            return 0

    @override
    @classmethod
    def _from_type(cls, type_: type[int], /, *, type_map: DataType.TypeMap) -> Self:
        layout = SIZED_INT_LAYOUTS.get(type_)
        if layout is None:
            raise SerializationTypeError(f'expected a sized int type, got {type_}')
        return cls(layout.byte_size, signed=layout.signed, byteorder=layout.byteorder)

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise SerializationTypeError('expected integer')
        self._check_range(value)

    def _check_range(self, value: int) -> None:
        if value > self._upper_bound_value():
            raise ValueError('above upper bound')
        if value < self._lower_bound_value():
            raise ValueError('below lower bound')

    @override
    def _serialize(self, serializer: Serializer, value: int, /) -> None:
        encode_int(serializer, value, length=self._fixed_size, signed=self._signed, byteorder=self._byteorder)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        return decode_int(deserializer, length=self._fixed_size, signed=self._signed, byteorder=self._byteorder)


class FloatDataType(DataType[float]):
    """ Represents builtin `float` values as IEEE-754 single (4 bytes) or double (8 bytes) precision numbers.
    """

    __slots__ = ('_fixed_size', '_byteorder')

    _fixed_size: int
    _byteorder: ByteOrder | None

    def __init__(self, byte_size: int, *, byteorder: ByteOrder | None = None) -> None:
        self._fixed_size = byte_size
        self._byteorder = byteorder

    @override
    @classmethod
    def _from_type(cls, type_: type[float], /, *, type_map: DataType.TypeMap) -> Self:
        byte_size = FLOAT_SIZES.get(type_)
        if byte_size is None:
            raise SerializationTypeError(f'expected a sized float type, got {type_}')
        return cls(byte_size)

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        # XXX: ints are accepted, like in any other float context
        if not isinstance(value, (float, int)) or isinstance(value, bool):
            raise SerializationTypeError('expected float')

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        encode_float(serializer, value, length=self._fixed_size, byteorder=self._byteorder)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return decode_float(deserializer, length=self._fixed_size, byteorder=self._byteorder)
