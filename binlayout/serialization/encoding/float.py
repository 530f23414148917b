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
This module implements encoding of IEEE-754 floating point numbers using 4 (single) or 8 (double precision) bytes.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4, byteorder='big')  # writes 3fc00000
>>> encode_float(se, -2.0, length=8, byteorder='little')  # writes 00000000000000c0
>>> bytes(se.finalize()).hex()
'3fc0000000000000000000c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('3fc0000000000000000000c0'))
>>> decode_float(de, length=4, byteorder='big')
1.5
>>> decode_float(de, length=8, byteorder='little')
-2.0
>>> de.finalize()
"""

from typing import Optional

from binlayout.serialization import Deserializer, Serializer

from .int import ByteOrder, resolve_byteorder

_FORMAT_CHARS = {
    4: 'f',
    8: 'd',
}
_BYTEORDER_CHARS = {
    'little': '<',
    'big': '>',
}


def _struct_format(length: int, byteorder: Optional[ByteOrder]) -> str:
    if length not in _FORMAT_CHARS:
        raise ValueError(f'unsupported float length: {length}')
    return _BYTEORDER_CHARS[resolve_byteorder(byteorder)] + _FORMAT_CHARS[length]


def encode_float(serializer: Serializer, value: float, *, length: int, byteorder: Optional[ByteOrder] = None) -> None:
    """ Encode a float using 4 or 8 bytes.

    Finite values outside the range of the chosen precision are rejected:

    >>> encode_float(Serializer.build_bytes_serializer(), 1e40, length=4)
    Traceback (most recent call last):
    ...
    ValueError: too big to encode
    """
    try:
        serializer.write_struct((value,), _struct_format(length, byteorder))
    except OverflowError as e:
        raise ValueError('too big to encode') from e


def decode_float(deserializer: Deserializer, *, length: int, byteorder: Optional[ByteOrder] = None) -> float:
    """ Decode a float from 4 or 8 bytes.
    """
    value, = deserializer.read_struct(_struct_format(length, byteorder))
    return value
