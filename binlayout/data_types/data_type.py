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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from binlayout.data_types.utils import TypeAliasMap, TypeToDataTypeMap, get_aliased_type, get_usable_origin_type
from binlayout.serialization import Deserializer, Serializer
from binlayout.serialization.exceptions import SerializationTypeError

T = TypeVar('T')


class DataType(ABC, Generic[T]):
    """ This class models a type with a known type signature and how it will be (de)serialized.

    It is the Encoder/Decoder capability of a type: values can be written to a `Serializer`, read back from a
    `Deserializer` and have their encoded size estimated in advance. Compound data types (sequences, optionals,
    records, ...) hold the data types of their members and delegate to them, they never encode members themselves.

    Instances are usually built from a type annotation with `DataType.from_type` or `make_data_type`.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        data_types_map: TypeToDataTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses with a constant encoded size should set this, either on the class or on the instance
    _fixed_size: int | None = None

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> DataType[T]:
        """ Instantiate a DataType instance from a type signature using the given maps.

        A `data_types_map` associates concrete types to concrete DataType classes, while an `alias_map` associates
        types with substitute types to use instead.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        data_type = type_map.data_types_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return data_type._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a DataType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        decide on using `DataType.from_type`, forwarding the given `type_map` to continue instantiating DataType
        specializations, this is the case particularly for compound data types, like OptionalDataType.
        """
        # XXX: a DataType that is only meant for local use does not need to implement _from_type
        raise SerializationTypeError(f'{cls} is not compatible with use in a DataType.TypeMap')

    @final
    def fixed_size(self) -> int | None:
        """ The size of every encoded value when it is constant, `None` when it depends on the value.
        """
        return self._fixed_size

    @final
    def check_value(self, value: T, /) -> None:
        """ Raises a SerializationTypeError (or ValueError for out of range values) if the value is not compatible.

        A value being compatible is more than just having the correct instance, for example if the value is a list,
        all the list's items must be checked for compatibility.
        """
        # XXX: subclasses must implement DataType._check_value, not DataType.check_value
        self._check_value(value, deep=True)

    @final
    def size_hint(self, value: T, /) -> int:
        """ Number of bytes `value` takes when serialized, or a safe upper bound of it.

        Useful for pre-sizing a buffer before serializing.
        """
        self._check_value(value, deep=False)
        return self._size_hint(value)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value instance according to the signature that was abstracted.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        # XXX: subclasses must implement DataType._serialize, not DataType.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Deserialize a value instance according to the signature that was abstracted.

        The deserializer is advanced by exactly the number of bytes the value takes. On failure the exception is
        propagated immediately and no partial value is returned.
        """
        # XXX: subclasses must implement DataType._deserialize, not DataType.deserialize
        return self._deserialize(deserializer)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes | bytearray | memoryview, /) -> T:
        """ Shortcut to quickly parse a value T from `bytes` and avoid using the serialization system.

        All the bytes must be consumed, trailing data is an error.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `DataType.check_value`, should raise if the given value is not valid.

        Compound values should use `DataType._check_value` on the inner type(s) instead of `DataType.check_value` and
        pass the appropriate deep argument.
        """
        raise NotImplementedError

    def _size_hint(self, value: T, /) -> int:
        """ Inner implementation of `size_hint`, data types with a fixed size don't need to override it.
        """
        if self._fixed_size is None:
            raise NotImplementedError
        return self._fixed_size

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        When implementing the serialization with compound encoders, `DataType.serialize` should be passed as an
        `Encoder` instead of `DataType._serialize`, that way the next `_serialize` implementation will be able to
        assume that the value was checked.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        """ Inner implementation of `deserialize`, it is expected that deserializers always produce valid values.
        """
        raise NotImplementedError
