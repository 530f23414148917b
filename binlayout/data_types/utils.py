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

from collections.abc import Mapping
from dataclasses import dataclass, is_dataclass
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar, Union, cast, get_args, get_origin

from structlog import get_logger

from binlayout.serialization.exceptions import SerializationTypeError

if TYPE_CHECKING:
    from binlayout.data_types import DataType


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[Any, Any]
TypeToDataTypeMap: TypeAlias = Mapping[Any, type['DataType']]


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> from binlayout.types import U8
    >>> pretty_type(None), pretty_type(int), pretty_type(U8), pretty_type(list[int])
    ('None', 'int', 'U8', 'list[int]')
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__name__', repr(type_))


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, `int` is mapped to `I64` in the default alias map:

    >>> orig_type = tuple[str, list[int], bytearray]
    >>> from binlayout.data_types import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(orig_type, alias_map, _verbose=False)
    tuple[str, list[binlayout.types.I64], bytes]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_
    aliased_origin: Any
    replaced = False

    # XXX: special case, replace typing.Union with types.UnionType
    if origin_type is Union:
        aliased_origin = UnionType
    elif origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    type_args = get_args(type_)
    if not type_args:
        # normal case when there aren't type arguments
        return aliased_origin, replaced

    # use _get_aliased_type for recursion so we don't log multiple times when a replacement happens
    aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
    aliased_args, args_replaced = zip(*aliased_args_replaced)
    replaced |= any(args_replaced)

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), replaced

    assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return aliased_origin[*aliased_args], replaced


def get_usable_origin_type(type_: Any, /, *, type_map: 'DataType.TypeMap', _verbose: bool = True) -> Any:
    """ The purpose of this function is to map a given type into a type that is usable in a DataType.TypeMap

    It takes into account type-aliasing according to DataType.TypeMap.alias_map. If the given type cannot be used in
    the given type_map, a SerializationTypeError exception will be raised.

    The returned type is such that it is guaranteed to exist in `type_map.data_types_map`. Dataclasses are all mapped
    by the `dataclass` decorator itself:

    >>> from binlayout.data_types import _DEFAULT_TYPE_MAP as default_type_map
    >>> get_usable_origin_type(list[int], type_map=default_type_map, _verbose=False)
    <class 'list'>
    >>> get_usable_origin_type(str | None, type_map=default_type_map, _verbose=False) is UnionType
    True
    >>> @dataclass
    ... class Point:
    ...     x: int
    ...     y: int
    >>> get_usable_origin_type(Point, type_map=default_type_map, _verbose=False) is dataclass
    True
    """
    if isinstance(type_, str):
        raise NotImplementedError('string annotations are not currently supported')

    # if we have a `list[int]` we use `get_origin()` to get the `list` part, since it's a different instance
    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type = get_origin(aliased_type) or aliased_type
    if origin_aliased_type is Union:
        origin_aliased_type = UnionType

    if origin_aliased_type in type_map.data_types_map:
        return origin_aliased_type

    if dataclass in type_map.data_types_map and isinstance(aliased_type, type) and is_dataclass(aliased_type):
        return cast(Any, dataclass)

    raise SerializationTypeError(f'type {pretty_type(type_)} is not supported by any DataType class')
