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
from typing import Any, Generic, NamedTuple, Optional, TypeVar, final

from typing_extensions import Self

from bencodec.btypes.utils import TypeAliasMap, TypeToBTypeMap, get_aliased_type, get_usable_origin_type
from bencodec.serialization import Buffer, Deserializer, Serializer

T = TypeVar('T')


class BType(ABC, Generic[T]):
    """ This class is used to model a Python type and how its values are (de)serialized to Bencode.

    A BType is built once from a type annotation (`BType.from_type(list[int])`) and can then be used to serialize and
    deserialize any number of values. Compound BTypes (lists, maps, records, ...) hold the BTypes of their members,
    so the whole shape is resolved when the BType is built and unsupported annotations fail early.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        btypes_map: TypeToBTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _is_hashable: bool

    @final
    @staticmethod
    def from_type(type_: Any, /, *, type_map: Optional[BType.TypeMap] = None) -> BType:
        """ Instantiate a BType instance from a type signature using the given maps.

        A `btypes_map` associates concrete types to concrete BType classes, while an `alias_map` associates types with
        substitute types to use instead. When no `type_map` is given the default maps are used.
        """
        if type_map is None:
            from bencodec.btypes import DEFAULT_TYPE_MAP
            type_map = DEFAULT_TYPE_MAP
        usable_origin = get_usable_origin_type(type_, type_map=type_map)
        btype = type_map.btypes_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return btype._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        """ Instantiate a BType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `BType.from_type` for its members, forwarding the given `type_map`.
        """
        # XXX: a BType that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a BType.TypeMap')

    @final
    def is_hashable(self) -> bool:
        """ Indicates whether the values of this type are expected to be hashable, required for map keys and sets."""
        return self._is_hashable

    def is_optional(self) -> bool:
        """ Whether the value can be absent, in which case it's omitted from records and maps."""
        return False

    def entry_btype(self) -> BType[T]:
        """ The BType used for the value of a record or map entry that is present.

        Only an optional BType differs, its entries are either omitted or hold a value of the inner type.
        """
        return self

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise an `UnsupportedTypeError` if the value isn't compatible, recursing into compound values.

        Compatibility is more than the instance's class, for example every key and value of a dict is checked, and
        integers are checked against the range of their width (`IntegerOverflowError`).
        """
        # XXX: subclasses must implement BType._check_value, not BType.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value according to the type that was abstracted.

        The value is checked while it is serialized, so calling `check_value` before is not needed.
        """
        # XXX: subclasses must implement BType._serialize, not BType.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Deserialize a value according to the type that was abstracted.
        """
        # XXX: subclasses must implement BType._deserialize, not BType.deserialize
        return self._deserialize(deserializer)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: Buffer, /) -> T:
        """ Shortcut to quickly parse a value T from `bytes` and avoid using the serialization system.

        The whole input must be consumed.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `BType.check_value`.

        Compound values should use `BType._check_value` on the inner type(s) instead of `BType.check_value` and pass
        the appropriate deep argument.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        When implementing the serialization with compound encoders, `BType.serialize` should be passed as an `Encoder`
        instead of `BType._serialize`, so the members are checked too.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        """ Inner implementation of `deserialize`, it is expected that deserializers always produce valid values.
        """
        raise NotImplementedError
