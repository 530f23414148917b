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
This module implements the variable-length integer encodings used for length prefixes: L2 and L3.

Smaller values need fewer bytes. The one or two most significant bits of the first byte tell how many bytes follow
and the remaining bits hold the value, least significant bits first.

L2, the default, holds up to 15 bits:

    | MSB | Length | Usable Bits | Range    |
    |  0  |   1    |      7      | 0..127   |
    |  1  |   2    |     15      | 0..32767 |

L3 holds up to 22 bits:

    | MSB | Length | Usable Bits | Range      |
    |  0  |   1    |      7      | 0..127     |
    | 10  |   2    |     14      | 0..16383   |
    | 11  |   3    |     22      | 0..4194303 |

For example 0xC0DE in L3 is 3 bytes, the first byte has `11` on its top bits and the lowest 6 bits of the value:

    1st byte: 11_011110
    2nd byte: 00000011
    3rd byte: 00000011

Exactly one layout is active per process, it is chosen with the `LENCODER` setting and `encode_lencoder`/
`decode_lencoder` always use it.

>>> se = Serializer.build_bytes_serializer()
>>> encode_l2(se, 0)  # writes 00
>>> encode_l2(se, 127)  # writes 7f
>>> encode_l2(se, 128)  # writes 8001
>>> encode_l2(se, 32767)  # writes ffff
>>> bytes(se.finalize()).hex()
'007f8001ffff'

>>> se = Serializer.build_bytes_serializer()
>>> encode_l3(se, 127)  # writes 7f
>>> encode_l3(se, 16383)  # writes bfff
>>> encode_l3(se, 0xC0DE)  # writes de0303
>>> bytes(se.finalize()).hex()
'7fbfffde0303'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('7fbfffde0303'))
>>> decode_l3(de)  # reads 7f
127
>>> decode_l3(de)  # reads bfff
16383
>>> decode_l3(de)  # reads de0303
49374
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('de03'))
>>> try:
...     decode_l3(de)
... except OutOfDataError as e:
...     print(*e.args)
not enough bytes to read

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_l2(se, 32768, check_overflow=True)
... except TooLongError as e:
...     print(*e.args)
32768 exceeds the maximum L2 value 32767
"""

from typing import Callable, NamedTuple, Optional

from binlayout.conf.get_settings import get_global_settings
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.exceptions import OutOfDataError, TooLongError

L2_MAX = 0x7FFF  # 15 bits: 32767
L3_MAX = 0x3FFFFF  # 22 bits: 4194303


def _check_overflow(value: int, max_value: int, name: str, check_overflow: Optional[bool]) -> None:
    if value < 0:
        raise ValueError(f'cannot encode value <0 as {name}')
    if check_overflow is None:
        check_overflow = get_global_settings().should_check_overflow()
    if check_overflow and value > max_value:
        raise TooLongError(f'{value} exceeds the maximum {name} value {max_value}')


def encode_l2(serializer: Serializer, value: int, *, check_overflow: Optional[bool] = None) -> None:
    """ Encodes an unsigned integer using 1 or 2 bytes.

    When `check_overflow` is `None` the `LENGTH_OVERFLOW_CHECK` setting decides whether values above `L2_MAX` raise a
    `TooLongError`, unchecked values are truncated to 15 bits.
    """
    _check_overflow(value, L2_MAX, 'L2', check_overflow)
    if value < 0x80:
        serializer.write_byte(value)
    else:
        serializer.write_bytes(bytes((0x80 | (value & 0x7F), (value >> 7) & 0xFF)))


def decode_l2(deserializer: Deserializer) -> int:
    """ Decodes an L2 encoded unsigned integer.
    """
    b1 = deserializer.read_byte()
    if b1 >> 7 == 0:
        return b1
    b2 = deserializer.read_byte()
    return (b1 & 0x7F) | (b2 << 7)


def encode_l3(serializer: Serializer, value: int, *, check_overflow: Optional[bool] = None) -> None:
    """ Encodes an unsigned integer using 1, 2 or 3 bytes.

    When `check_overflow` is `None` the `LENGTH_OVERFLOW_CHECK` setting decides whether values above `L3_MAX` raise a
    `TooLongError`, unchecked values are truncated to 22 bits.
    """
    _check_overflow(value, L3_MAX, 'L3', check_overflow)
    if value < 0x80:
        serializer.write_byte(value)
    elif value < 0x4000:
        serializer.write_bytes(bytes((0x80 | (value & 0x3F), value >> 6)))
    else:
        serializer.write_bytes(bytes((0xC0 | (value & 0x3F), (value >> 6) & 0xFF, (value >> 14) & 0xFF)))


def decode_l3(deserializer: Deserializer) -> int:
    """ Decodes an L3 encoded unsigned integer.
    """
    b1 = deserializer.read_byte()
    if b1 >> 7 == 0:
        return b1
    if b1 >> 6 == 0b10:
        b2 = deserializer.read_byte()
        return (b1 & 0x3F) | (b2 << 6)
    # only `11` is left for the top bits, both continuation bytes must be available before consuming them
    b2, b3 = deserializer.read_bytes(2)
    return (b1 & 0x3F) | (b2 << 6) | (b3 << 14)


class LencoderVariant(NamedTuple):
    """One of the variable-length integer layouts."""

    name: str
    # maximum value that can be encoded
    max_value: int
    # maximum number of bytes of an encoded value, useful for size hints
    max_size: int
    encode: Callable[..., None]
    decode: Callable[[Deserializer], int]

    def size_of(self, value: int) -> int:
        """Exact number of bytes `value` takes when encoded.

        >>> L2.size_of(127), L2.size_of(128)
        (1, 2)
        >>> L3.size_of(16383), L3.size_of(16384)
        (2, 3)
        """
        if value < 0x80:
            return 1
        if self.max_size == 2 or value < 0x4000:
            return 2
        return 3


L2 = LencoderVariant('L2', L2_MAX, 2, encode_l2, decode_l2)
L3 = LencoderVariant('L3', L3_MAX, 3, encode_l3, decode_l3)

_VARIANTS: dict[str, LencoderVariant] = {
    'L2': L2,
    'L3': L3,
}


def get_lencoder() -> LencoderVariant:
    """ Returns the layout selected by the `LENCODER` setting.
    """
    return _VARIANTS[get_global_settings().LENCODER]


def encode_lencoder(serializer: Serializer, value: int) -> None:
    """ Encodes a length using the active layout.
    """
    get_lencoder().encode(serializer, value)


def decode_lencoder(deserializer: Deserializer) -> int:
    """ Decodes a length using the active layout.
    """
    return get_lencoder().decode(deserializer)
