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
Value types and type tags understood by the data types of `binlayout.data_types`.

The sized number tags are `NewType`s over `int`/`float`, they cost nothing at runtime and are only used in annotations
to pick a fixed-width encoding. Tags without an explicit byte order use the `BYTEORDER` setting.
"""

from collections.abc import Iterator
from typing import Any, Generic, NewType, TypeVar

T = TypeVar('T')
L = TypeVar('L')
P = TypeVar('P')

# unsigned integers
U8 = NewType('U8', int)
U16 = NewType('U16', int)
U32 = NewType('U32', int)
U64 = NewType('U64', int)
U16LE = NewType('U16LE', int)
U32LE = NewType('U32LE', int)
U64LE = NewType('U64LE', int)
U16BE = NewType('U16BE', int)
U32BE = NewType('U32BE', int)
U64BE = NewType('U64BE', int)

# signed integers
I8 = NewType('I8', int)
I16 = NewType('I16', int)
I32 = NewType('I32', int)
I64 = NewType('I64', int)

# floats
F32 = NewType('F32', float)
F64 = NewType('F64', float)


class Box(Generic[T]):
    """ Single-owner indirection to a value of type `T`.

    It is transparent to serialization: a `Box[T]` is encoded exactly like `T` would be, the wrapper adds no bytes
    and no logic. Wrapping or unwrapping a field never changes the wire format.

    >>> Box(3) == Box(3)
    True
    >>> Box(3).value
    3
    """

    __slots__ = ('value',)

    value: T

    def __init__(self, value: T) -> None:
        self.value = value

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Box) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f'Box({self.value!r})'


class Record(Generic[L, P]):
    """ Wraps a payload (a `str` or a `list`) whose length prefix is encoded as the fixed-width integer `L`.

    By default text and sequences are encoded with a variable-length prefix, `Record[U8, str]` uses a single byte
    instead, `Record[U16BE, list[T]]` uses 2 bytes in big-endian, and so on. The wrapper carries no identity besides
    its payload, iteration and indexing are forwarded to it. `len()` counts what the prefix counts: the UTF-8 bytes
    of a text or the items of a list.

    >>> record = Record[U8, str]('HelloWorld')
    >>> len(record)
    10
    >>> record.data
    'HelloWorld'
    >>> record == Record('HelloWorld')
    True
    >>> len(Record[U8, str]('ππ'))
    4
    """

    __slots__ = ('data',)

    data: P

    def __init__(self, data: P) -> None:
        self.data = data

    def __len__(self) -> int:
        # the length of a text payload is its UTF-8 byte length, as it is counted in the prefix
        if isinstance(self.data, str):
            return len(self.data.encode('utf-8'))
        return len(self.data)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)  # type: ignore[call-overload]

    def __getitem__(self, index: Any) -> Any:
        return self.data[index]  # type: ignore[index]

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Record) and self.data == other.data

    def __hash__(self) -> int:
        # lists are unhashable, like they would be unwrapped
        return hash(self.data)

    def __repr__(self) -> str:
        return f'Record({self.data!r})'
