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

from enum import Enum, IntEnum
from typing import Any, TypeVar

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.compound_encoding.variant import decode_variant, encode_unit_variant
from bencodec.encoding.integer import decode_integer, encode_integer
from bencodec.exceptions import InvalidVariantEncodingError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer
from bencodec.utils.typing import is_subclass

E = TypeVar('E', bound=Enum)
I = TypeVar('I', bound=IntEnum)  # noqa: E741


class EnumBType(BType[E]):
    """ Plain enums are encoded as the member's name, a bare byte string.

    >>> from enum import Enum
    >>> class Color(Enum):
    ...     RED = 1
    ...     GREEN = 2
    >>> btype = EnumBType.from_type(Color)
    >>> btype.to_bytes(Color.GREEN)
    b'5:GREEN'
    >>> btype.from_bytes(b'3:RED')
    <Color.RED: 1>
    """

    __slots__ = ('_enum_class', '_members')
    _is_hashable = True
    _enum_class: type[E]
    _members: dict[bytes, E]

    def __init__(self, enum_class: type[E]) -> None:
        self._enum_class = enum_class
        self._members = {member.name.encode('utf-8'): member for member in enum_class}

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_subclass(type_, Enum):
            raise UnsupportedTypeError('expected an Enum type')
        return cls(type_)

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self._enum_class):
            raise UnsupportedTypeError(f'expected {self._enum_class.__name__}, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: E, /) -> None:
        encode_unit_variant(serializer, value.name.encode('utf-8'))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> E:
        return decode_variant(deserializer, self._members, {})


class IntEnumBType(BType[I]):
    """ Integer enums are encoded as their integer value.
    """

    __slots__ = ('_enum_class',)
    _is_hashable = True
    _enum_class: type[I]

    def __init__(self, enum_class: type[I]) -> None:
        self._enum_class = enum_class

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_subclass(type_, IntEnum):
            raise UnsupportedTypeError('expected an IntEnum type')
        return cls(type_)

    @override
    def _check_value(self, value: I, /, *, deep: bool) -> None:
        if not isinstance(value, self._enum_class):
            raise UnsupportedTypeError(f'expected {self._enum_class.__name__}, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: I, /) -> None:
        encode_integer(serializer, int(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> I:
        pos = deserializer.cur_pos()
        raw_value = decode_integer(deserializer)
        try:
            return self._enum_class(raw_value)
        except ValueError:
            raise InvalidVariantEncodingError(
                f'{raw_value} is not a valid {self._enum_class.__name__}',
                offset=pos,
            ) from None
