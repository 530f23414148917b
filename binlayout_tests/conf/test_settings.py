import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from binlayout.conf import DEFAULT_SETTINGS_FILEPATH, L3_SETTINGS_FILEPATH, UNITTESTS_SETTINGS_FILEPATH, get_settings
from binlayout.conf.get_settings import CONFIG_YAML_ENV_VAR, get_global_settings, get_settings_source
from binlayout.conf.settings import BinLayoutSettings, OverflowCheck
from binlayout.utils.yaml import dict_from_extended_yaml


def test_default_settings():
    settings = BinLayoutSettings.from_yaml(filepath=DEFAULT_SETTINGS_FILEPATH)
    assert settings == BinLayoutSettings()
    assert settings.LENCODER == 'L2'
    assert settings.BYTEORDER == 'little'
    assert settings.LENGTH_OVERFLOW_CHECK is OverflowCheck.DEBUG
    assert settings.MAX_BYTES_LENGTH is None


def test_extended_settings():
    settings = BinLayoutSettings.from_yaml(filepath=L3_SETTINGS_FILEPATH)
    assert settings.LENCODER == 'L3'
    assert settings.BYTEORDER == 'little'


def test_unittests_settings_are_loaded():
    settings = get_global_settings()
    assert get_settings_source() == os.environ[CONFIG_YAML_ENV_VAR] == UNITTESTS_SETTINGS_FILEPATH
    assert settings.LENCODER == 'L2'
    assert settings.LENGTH_OVERFLOW_CHECK is OverflowCheck.ALWAYS
    assert settings.should_check_overflow()


def test_settings_are_frozen():
    settings = BinLayoutSettings()
    with pytest.raises(ValidationError):
        settings.LENCODER = 'L3'  # type: ignore[misc]


@pytest.mark.parametrize('kwargs', [
    dict(LENCODER='L4'),
    dict(BYTEORDER='middle'),
    dict(LENGTH_OVERFLOW_CHECK='sometimes'),
    dict(MAX_BYTES_LENGTH=-1),
    dict(UNKNOWN_SETTING=1),
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValidationError):
        BinLayoutSettings(**kwargs)


@pytest.mark.parametrize('check, expected', [
    (OverflowCheck.ALWAYS, True),
    (OverflowCheck.NEVER, False),
    (OverflowCheck.DEBUG, __debug__),
])
def test_should_check_overflow(check, expected):
    assert BinLayoutSettings(LENGTH_OVERFLOW_CHECK=check).should_check_overflow() is expected


def test_extends_chain(tmp_path: Path):
    base = tmp_path / 'base.yml'
    base.write_text('LENCODER: L3\nBYTEORDER: big\n')
    middle = tmp_path / 'middle.yml'
    middle.write_text('extends: base.yml\nBYTEORDER: little\n')
    top = tmp_path / 'top.yml'
    top.write_text('extends: middle.yml\nMAX_BYTES_LENGTH: 10\n')
    assert dict_from_extended_yaml(filepath=top) == dict(LENCODER='L3', BYTEORDER='little', MAX_BYTES_LENGTH=10)


def test_missing_yaml(tmp_path: Path):
    with pytest.raises(ValueError):
        dict_from_extended_yaml(filepath=tmp_path / 'missing.yml')


def test_load_twice_with_different_source():
    get_global_settings()
    with pytest.raises(Exception):
        get_settings._load_settings_singleton(DEFAULT_SETTINGS_FILEPATH)
    # loading again from the same source is fine
    assert get_settings._load_settings_singleton(UNITTESTS_SETTINGS_FILEPATH) is get_global_settings()


def test_unittests_settings_pin_lencoder():
    data = dict_from_extended_yaml(filepath=UNITTESTS_SETTINGS_FILEPATH)
    assert data['LENCODER'] == 'L2'
