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
This modules implements encoding of byte sequence by prefixing it with the length of the sequence encoded with the
active Lencoder layout (L2 by default).

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # will prepend b'\x04' before writing b'test'
>>> bytes(se.finalize()).hex()
'0474657374'

>>> se = Serializer.build_bytes_serializer()
>>> raw_data = b'test' * 32
>>> len(raw_data)
128
>>> encode_bytes(se, raw_data)  # prepends b'\x80\x01' before raw_data
>>> encoded_data = bytes(se.finalize())
>>> len(encoded_data)
130
>>> encoded_data[:10].hex()
'80017465737474657374'

>>> de = Deserializer.build_bytes_deserializer(encoded_data)  # that we encoded before
>>> decoded_data = decode_bytes(de)
>>> de.finalize()  # called to assert we've consumed everything
>>> decoded_data == raw_data
True

Decoding a view does not copy, the result shares memory with the input:

>>> data = bytearray(b'\x04testfoo')
>>> de = Deserializer.build_bytes_deserializer(data)
>>> view = decode_bytes_view(de)
>>> bytes(view)
b'test'
>>> data[1:5] = b'TEST'
>>> bytes(view)
b'TEST'
>>> bytes(de.read_all())
b'foo'

>>> de = Deserializer.build_bytes_deserializer(b'\x04tes')
>>> try:
...     decode_bytes(de)
... except OutOfDataError as e:
...     print(*e.args)
not enough bytes to read
"""

from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.exceptions import OutOfDataError  # noqa: F401
from binlayout.serialization.types import Buffer

from .lencoder import decode_lencoder, encode_lencoder


def encode_bytes(serializer: Serializer, data: Buffer) -> None:
    """ Encodes a byte-sequence adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(data, (bytes, bytearray, memoryview))
    view = memoryview(data)
    encode_lencoder(serializer, view.nbytes)
    serializer.write_bytes(view)


def decode_bytes_view(deserializer: Deserializer) -> memoryview:
    """ Decodes a byte-sequence with a length prefix without copying it.

    The returned view references the deserializer's input.
    """
    size = decode_lencoder(deserializer)
    return memoryview(deserializer.read_bytes(size))


def decode_bytes(deserializer: Deserializer) -> bytes:
    """ Decodes a byte-sequence with a length prefix into a new `bytes` instance.

    This modules's docstring has more details and examples.
    """
    return bytes(decode_bytes_view(deserializer))
