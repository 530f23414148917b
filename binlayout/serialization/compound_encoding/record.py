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

r"""
A record is text or a collection whose length prefix is a fixed-width unsigned integer instead of a Lencoder value.

Layout:

    [N: length-bytes unsigned int][utf-8 bytes] for text, N counts bytes
    [N: length-bytes unsigned int][value_0]...[value_N-1] for collections, N counts elements

This trades the flexibility of the variable-length prefix for a fixed wire shape, which can be smaller when payloads
are known to be short or needed for compatibility with an external format.

>>> se = Serializer.build_bytes_serializer()
>>> encode_record_text(se, 'HelloWorld', length=1)
>>> data = bytes(se.finalize())
>>> len(data)
11
>>> data.hex()
'0a48656c6c6f576f726c64'

>>> de = Deserializer.build_bytes_deserializer(data)
>>> decode_record_text(de, length=1)
'HelloWorld'
>>> de.finalize()

>>> from binlayout.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_record_collection(se, [True, False, True], encode_bool, length=2, byteorder='big')
>>> bytes(se.finalize()).hex()
'0003010001'
>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0003010001'))
>>> decode_record_collection(de, decode_bool, list, length=2, byteorder='big')
[True, False, True]

Lengths that don't fit are never truncated:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_record_text(se, 'x' * 256, length=1)
... except TooLongError as e:
...     print(*e.args)
length 256 does not fit in 1 byte(s)
"""

import sys
from collections.abc import Collection, Iterable
from typing import Callable, Optional, TypeVar

from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.encoding.int import ByteOrder, decode_int, encode_int
from binlayout.serialization.encoding.utf8 import validate_utf8
from binlayout.serialization.exceptions import InvalidLengthError, TooLongError

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_record_length(serializer: Serializer, size: int, *, length: int, byteorder: Optional[ByteOrder]) -> None:
    """ Encodes a length prefix as an unsigned int of `length` bytes, raises `TooLongError` if it doesn't fit.
    """
    if size >= 1 << (8 * length):
        raise TooLongError(f'length {size} does not fit in {length} byte(s)')
    encode_int(serializer, size, length=length, signed=False, byteorder=byteorder)


def decode_record_length(deserializer: Deserializer, *, length: int, byteorder: Optional[ByteOrder]) -> int:
    """ Decodes a length prefix, raises `InvalidLengthError` if it can't be used as a size.
    """
    size = decode_int(deserializer, length=length, signed=False, byteorder=byteorder)
    if size > sys.maxsize:
        raise InvalidLengthError(f'length {size} cannot be used as a size')
    return size


def encode_record_text(
    serializer: Serializer,
    value: str,
    *,
    length: int,
    byteorder: Optional[ByteOrder] = None,
) -> None:
    assert isinstance(value, str)
    data = value.encode('utf-8')
    encode_record_length(serializer, len(data), length=length, byteorder=byteorder)
    serializer.write_bytes(data)


def decode_record_text(deserializer: Deserializer, *, length: int, byteorder: Optional[ByteOrder] = None) -> str:
    size = decode_record_length(deserializer, length=length, byteorder=byteorder)
    return validate_utf8(memoryview(deserializer.read_bytes(size)))


def encode_record_collection(
    serializer: Serializer,
    values: Collection[T],
    encoder: Encoder[T],
    *,
    length: int,
    byteorder: Optional[ByteOrder] = None,
) -> None:
    encode_record_length(serializer, len(values), length=length, byteorder=byteorder)
    for value in values:
        encoder(serializer, value)


def decode_record_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
    *,
    length: int,
    byteorder: Optional[ByteOrder] = None,
) -> R:
    size = decode_record_length(deserializer, length=length, byteorder=byteorder)
    return builder(decoder(deserializer) for _ in range(size))
