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

from collections.abc import Collection, Iterable
from typing import TypeVar, get_args, get_origin

from typing_extensions import Self, override

from binlayout.data_types.data_type import DataType
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.compound_encoding.collection import decode_collection, encode_collection
from binlayout.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from binlayout.serialization.encoding.lencoder import get_lencoder
from binlayout.serialization.exceptions import SerializationTypeError

T = TypeVar('T')


class ListDataType(DataType[list[T]]):
    """ Represents builtin `list` values, a growable sequence prefixed by its element count.
    """

    __slots__ = ('_item',)

    _item: DataType[T]

    def __init__(self, item_data_type: DataType[T], /) -> None:
        self._item = item_data_type

    @property
    def item(self) -> DataType[T]:
        return self._item

    @override
    @classmethod
    def _from_type(cls, type_: type[list[T]], /, *, type_map: DataType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, list):
            raise SerializationTypeError('expected list type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise SerializationTypeError('expected list[<type>]')
        return cls(DataType.from_type(args[0], type_map=type_map))

    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)

    @override
    def _check_value(self, value: list[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes)):
            raise SerializationTypeError('expected list-like')
        if deep:
            for i in value:
                self._item._check_value(i, deep=True)

    @override
    def _size_hint(self, value: list[T], /) -> int:
        return get_lencoder().size_of(len(value)) + sum(self._item.size_hint(i) for i in value)

    @override
    def _serialize(self, serializer: Serializer, value: list[T], /) -> None:
        encode_collection(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> list[T]:
        return decode_collection(deserializer, self._item.deserialize, self._build)


# XXX: we can't usefully describe the tuple type
class TupleDataType(DataType[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or heterogeneous-type fixed size.

    The fixed size form `tuple[A, B, C]` is how fixed-length arrays are represented, its items are laid out one after
    the other with no count prefix.
    """

    __slots__ = ('_fixed_size', '_varsize', '_args')

    _varsize: bool
    _args: tuple[DataType, ...]

    def __init__(self, args: DataType | Iterable[DataType]) -> None:
        if isinstance(args, Iterable):
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, DataType)
            sizes = [arg.fixed_size() for arg in self._args]
            self._fixed_size = None if None in sizes else sum(sizes)  # type: ignore[arg-type]
        else:
            assert isinstance(args, DataType)
            self._varsize = True
            self._args = (args,)
            self._fixed_size = None

    @override
    @classmethod
    def _from_type(cls, type_: type[tuple], /, *, type_map: DataType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, tuple):
            raise SerializationTypeError('expected tuple type')
        args = list(get_args(type_))
        if not args:
            raise SerializationTypeError('expected tuple[<args...>]')
        if args[-1] == Ellipsis:
            if len(args) != 2:
                raise SerializationTypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(DataType.from_type(arg, type_map=type_map))
        else:
            return cls(DataType.from_type(arg, type_map=type_map) for arg in args)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise SerializationTypeError('expected tuple-like')
        if not self._varsize and len(value) != len(self._args):
            raise SerializationTypeError('wrong tuple size')
        if deep:
            if self._varsize:
                arg_data_type, = self._args
                for i in value:
                    arg_data_type._check_value(i, deep=True)
            else:
                for i, arg_data_type in zip(value, self._args):
                    arg_data_type._check_value(i, deep=True)

    @override
    def _size_hint(self, value: tuple, /) -> int:
        if self._varsize:
            arg_data_type, = self._args
            return get_lencoder().size_of(len(value)) + sum(arg_data_type.size_hint(i) for i in value)
        else:
            return sum(arg_data_type.size_hint(i) for i, arg_data_type in zip(value, self._args))

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /) -> None:
        if self._varsize:
            assert len(self._args) == 1
            encode_collection(serializer, value, self._args[0].serialize)
        else:
            encode_tuple(serializer, tuple(value), tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple:
        if self._varsize:
            assert len(self._args) == 1
            return decode_collection(deserializer, self._args[0].deserialize, tuple)
        else:
            return decode_tuple(deserializer, tuple(i.deserialize for i in self._args))
