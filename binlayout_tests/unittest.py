import unittest
from contextlib import contextmanager
from typing import Any, Iterator, TypeVar
from unittest import main as ut_main

from structlog import get_logger

from binlayout.conf import get_settings
from binlayout.conf.get_settings import get_global_settings
from binlayout.conf.settings import BinLayoutSettings
from binlayout.data_types import DataType, make_data_type
from binlayout.serialization import Deserializer, Serializer

logger = get_logger()
main = ut_main

T = TypeVar('T')


@contextmanager
def override_settings(**kwargs: Any) -> Iterator[BinLayoutSettings]:
    """ Temporarily replace the process-wide settings with a copy that has the given fields updated.
    """
    old_singleton = get_settings._settings_singleton
    assert old_singleton is not None, 'get_global_settings() not called before'
    settings = BinLayoutSettings.model_validate({**old_singleton.settings.model_dump(), **kwargs})
    get_settings._settings_singleton = get_settings._SettingsMetadata(source=old_singleton.source, settings=settings)
    try:
        yield settings
    finally:
        get_settings._settings_singleton = old_singleton


class TestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.log = logger.new()
        self._settings = get_global_settings()

    def serialize(self, data_type: DataType[T], value: T) -> bytes:
        """ Serialize through a fresh byte serializer, also checking that the size hint is an upper bound.
        """
        serializer = Serializer.build_bytes_serializer()
        data_type.serialize(serializer, value)
        pos = serializer.cur_pos()
        data = bytes(serializer.finalize())
        self.assertEqual(pos, len(data))
        self.assertGreaterEqual(data_type.size_hint(value), len(data))
        return data

    def assertRoundTrip(self, type_: Any, value: Any, *, size: int | None = None) -> bytes:
        """ Encode and decode `value` using the data type of `type_`, the decoded value must be equal and every
        encoded byte must be consumed. Returns the encoded bytes.
        """
        data_type = make_data_type(type_)
        data = self.serialize(data_type, value)
        if size is not None:
            self.assertEqual(len(data), size)
        deserializer = Deserializer.build_bytes_deserializer(data)
        decoded = data_type.deserialize(deserializer)
        self.assertEqual(deserializer.cur_pos(), len(data))
        deserializer.finalize()
        self.assertEqual(decoded, value)
        return data
