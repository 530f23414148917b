import pytest

from binlayout.serialization import Deserializer, InvalidLengthError, OutOfDataError, Serializer, Utf8Error
from binlayout.serialization.compound_encoding.collection import decode_collection, encode_collection
from binlayout.serialization.compound_encoding.record import (
    decode_record_collection,
    decode_record_length,
    decode_record_text,
    encode_record_collection,
    encode_record_text,
)
from binlayout.serialization.encoding.int import decode_int, encode_int
from binlayout.serialization.encoding.utf8 import decode_utf8, encode_utf8
from binlayout.serialization.exceptions import TooLongError


def _encode_u16(se, value):
    encode_int(se, value, length=2, signed=False)


def _decode_u16(de):
    return decode_int(de, length=2, signed=False)


def test_record_text_u8():
    se = Serializer.build_bytes_serializer()
    encode_record_text(se, 'HelloWorld', length=1)
    encoded = bytes(se.finalize())
    assert len(encoded) == 11
    assert encoded[0] == 10
    de = Deserializer.build_bytes_deserializer(encoded)
    assert decode_record_text(de, length=1) == 'HelloWorld'
    de.finalize()


def test_record_text_max_u8():
    se = Serializer.build_bytes_serializer()
    encode_record_text(se, 'x' * 255, length=1)
    assert len(bytes(se.finalize())) == 256


def test_record_text_too_long():
    se = Serializer.build_bytes_serializer()
    with pytest.raises(TooLongError):
        encode_record_text(se, 'x' * 256, length=1)
    # the limit is on bytes, not characters
    with pytest.raises(TooLongError):
        encode_record_text(se, 'π' * 128, length=1)


@pytest.mark.parametrize('byteorder, expected_prefix', [('little', b'\x03\x00'), ('big', b'\x00\x03')])
def test_record_text_byteorder(byteorder, expected_prefix):
    se = Serializer.build_bytes_serializer()
    encode_record_text(se, 'abc', length=2, byteorder=byteorder)
    assert bytes(se.finalize()) == expected_prefix + b'abc'


def test_record_text_invalid_utf8():
    de = Deserializer.build_bytes_deserializer(b'\x02\xff\xff')
    with pytest.raises(Utf8Error) as exc_info:
        decode_record_text(de, length=1)
    assert exc_info.value.offset == 0


def test_record_text_truncated():
    de = Deserializer.build_bytes_deserializer(b'\x05abc')
    with pytest.raises(OutOfDataError):
        decode_record_text(de, length=1)


def test_record_collection_counts_elements():
    values = [1, 2, 0xFFFF]
    se = Serializer.build_bytes_serializer()
    encode_record_collection(se, values, _encode_u16, length=1)
    encoded = bytes(se.finalize())
    assert encoded[0] == 3
    assert len(encoded) == 1 + 3 * 2
    de = Deserializer.build_bytes_deserializer(encoded)
    assert decode_record_collection(de, _decode_u16, list, length=1) == values
    de.finalize()


def test_record_collection_heterogeneous_sizes():
    values = ['', 'a', 'πππ']
    se = Serializer.build_bytes_serializer()
    encode_record_collection(se, values, encode_utf8, length=4, byteorder='big')
    encoded = bytes(se.finalize())
    assert encoded[:4] == b'\x00\x00\x00\x03'
    de = Deserializer.build_bytes_deserializer(encoded)
    assert decode_record_collection(de, decode_utf8, tuple, length=4, byteorder='big') == tuple(values)
    de.finalize()


def test_record_collection_element_failure_propagates():
    # declares 2 elements but the second one is truncated
    de = Deserializer.build_bytes_deserializer(b'\x02\x01\x00\x02')
    with pytest.raises(OutOfDataError):
        decode_record_collection(de, _decode_u16, list, length=1)


def test_record_collection_empty():
    se = Serializer.build_bytes_serializer()
    encode_record_collection(se, [], _encode_u16, length=2)
    assert bytes(se.finalize()) == b'\x00\x00'


def test_record_length_above_maxsize():
    # a u64 length with all bits set cannot be used as a size on any platform
    de = Deserializer.build_bytes_deserializer(b'\xff' * 8)
    with pytest.raises(InvalidLengthError):
        decode_record_length(de, length=8, byteorder='little')


def test_collection_uses_lencoder_prefix():
    values = ['x'] * 200
    se = Serializer.build_bytes_serializer()
    encode_collection(se, values, encode_utf8)
    encoded = bytes(se.finalize())
    # 200 needs 2 bytes as L2, then each item takes 2 bytes
    assert len(encoded) == 2 + 200 * 2
    de = Deserializer.build_bytes_deserializer(encoded)
    assert decode_collection(de, decode_utf8, list) == values
    de.finalize()
