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


class SerializationError(Exception):
    """Base class for every error raised while encoding or decoding."""


class OutOfDataError(SerializationError):
    """Fewer bytes remain in the input than a field needs."""


class InvalidLengthError(SerializationError):
    """A decoded length cannot be represented as a size/index."""


class BadDataError(SerializationError, ValueError):
    """Decoded bytes failed a validity check."""


class Utf8Error(BadDataError):
    """Bytes declared as text are not valid UTF-8.

    `offset` is the position of the first invalid byte, relative to the start of the text payload.
    """

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class TooLongError(SerializationError, ValueError):
    """A value is too long to be encoded with the chosen length encoding or limit."""


class SerializationTypeError(SerializationError, TypeError):
    """A value or a type annotation does not match what a data type expects."""
