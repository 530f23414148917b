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

from enum import Enum
from typing import Literal, Optional

from pydantic import field_validator

from binlayout.utils import pydantic
from binlayout.utils.yaml import dict_from_extended_yaml


class OverflowCheck(str, Enum):
    """Policy for checking that an encoded length fits the active Lencoder layout."""

    # check on every encode
    ALWAYS = 'always'
    # check only when Python is not running optimized (-O), like an assert
    DEBUG = 'debug'
    # never check, values are masked to the bits the layout has
    NEVER = 'never'


class BinLayoutSettings(pydantic.BaseModel):
    # Layout of the variable-length integer used for the length prefix of byte runs, text and sequences
    LENCODER: Literal['L2', 'L3'] = 'L2'

    # Byte order used by fixed-width integers and floats unless their type sets one explicitly
    BYTEORDER: Literal['little', 'big'] = 'little'

    # Encode-side overflow check for Lencoder values, Record lengths are always checked
    LENGTH_OVERFLOW_CHECK: OverflowCheck = OverflowCheck.DEBUG

    # Maximum length in bytes of a single byte run or text, `None` means no limit
    MAX_BYTES_LENGTH: Optional[int] = None

    @field_validator('MAX_BYTES_LENGTH')
    @classmethod
    def _check_max_bytes_length(cls, max_bytes_length: Optional[int]) -> Optional[int]:
        if max_bytes_length is not None and max_bytes_length < 0:
            raise ValueError('MAX_BYTES_LENGTH cannot be negative')
        return max_bytes_length

    def should_check_overflow(self) -> bool:
        """Whether Lencoder values must be checked against the layout's maximum when encoding."""
        if self.LENGTH_OVERFLOW_CHECK is OverflowCheck.ALWAYS:
            return True
        if self.LENGTH_OVERFLOW_CHECK is OverflowCheck.NEVER:
            return False
        return __debug__

    @classmethod
    def from_yaml(cls, *, filepath: str) -> 'BinLayoutSettings':
        """Takes a filepath to a yaml file and returns a validated BinLayoutSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
