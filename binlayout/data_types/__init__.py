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

from dataclasses import dataclass
from types import UnionType
from typing import Optional, TypeVar, Union

from binlayout.data_types.bool_data_type import BoolDataType
from binlayout.data_types.box_data_type import BoxDataType
from binlayout.data_types.bytes_data_type import BytesDataType, BytesViewDataType
from binlayout.data_types.collection_data_type import ListDataType, TupleDataType
from binlayout.data_types.data_type import DataType
from binlayout.data_types.dataclass_data_type import DataclassDataType
from binlayout.data_types.optional_data_type import OptionalDataType
from binlayout.data_types.record_data_type import RecordDataType
from binlayout.data_types.sized_number_data_type import (
    FLOAT_SIZES,
    SIZED_INT_LAYOUTS,
    FloatDataType,
    SizedIntDataType,
)
from binlayout.data_types.str_data_type import StrDataType
from binlayout.data_types.utils import TypeAliasMap, TypeToDataTypeMap
from binlayout.types import F64, I64, Box, Record

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'ESSENTIAL_TYPE_ALIAS_MAP',
    'TYPE_TO_DATA_TYPE_MAP',
    'BoolDataType',
    'BoxDataType',
    'BytesDataType',
    'BytesViewDataType',
    'DataType',
    'DataclassDataType',
    'FloatDataType',
    'ListDataType',
    'OptionalDataType',
    'RecordDataType',
    'SizedIntDataType',
    'StrDataType',
    'TupleDataType',
    'TypeAliasMap',
    'TypeToDataTypeMap',
    'make_data_type',
]

T = TypeVar('T')

# this is the minimum type-alias-map needed for everything to work as intended
ESSENTIAL_TYPE_ALIAS_MAP: TypeAliasMap = {
    # XXX: technically types.UnionType is not a type, so mypy complains, but for our purposes it is a type
    Union: UnionType,  # type: ignore[dict-item]
}

# builtin types without a fixed size get one
DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    **ESSENTIAL_TYPE_ALIAS_MAP,
    bytearray: bytes,
    int: I64,
    float: F64,
}

# Mapping between types and DataType classes.
TYPE_TO_DATA_TYPE_MAP: TypeToDataTypeMap = {
    # builtin types:
    bool: BoolDataType,
    bytes: BytesDataType,
    memoryview: BytesViewDataType,
    str: StrDataType,
    list: ListDataType,
    tuple: TupleDataType,
    # other Python types:
    # XXX: ignored dict-item because Union is not considered a type, so mypy fails it, but it works for our case
    Union: OptionalDataType,  # type: ignore[dict-item]
    UnionType: OptionalDataType,
    dataclass: DataclassDataType,
    # binlayout types:
    Box: BoxDataType,
    Record: RecordDataType,
    **{tag: SizedIntDataType for tag in SIZED_INT_LAYOUTS},
    **{tag: FloatDataType for tag in FLOAT_SIZES},
}

_DEFAULT_TYPE_MAP = DataType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, TYPE_TO_DATA_TYPE_MAP)


def make_data_type(type_: type[T], /, *, extra_data_types_map: Optional[TypeToDataTypeMap] = None) -> DataType[T]:
    """ Like DataType.from_type, but with the default maps.

    Types that aren't supported out of the box can be given in `extra_data_types_map`, mapped to the DataType class
    that handles them, they are also used when found nested inside other types. If you need to customize the aliasing
    use `DataType.from_type` instead.

    >>> from binlayout.types import U8
    >>> make_data_type(list[Record[U8, str]]).to_bytes([Record('foo'), Record('bar')]).hex()
    '0203666f6f03626172'
    >>> make_data_type(Box[U8]).to_bytes(Box(7))
    b'\\x07'
    """
    if not extra_data_types_map:
        return DataType.from_type(type_, type_map=_DEFAULT_TYPE_MAP)
    type_map = DataType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, {**TYPE_TO_DATA_TYPE_MAP, **extra_data_types_map})
    return DataType.from_type(type_, type_map=type_map)
