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


"""
Unions without `None` are tagged unions, each member is tagged by its class name:

- a dataclass without fields is a unit variant, written as its bare name
- any other member is written as a single-entry dictionary `{name: payload}`, the payload encoded by the member's BType

>>> from dataclasses import dataclass
>>> @dataclass
... class Stop:
...     pass
>>> @dataclass
... class Move:
...     distance: int
>>> btype = VariantBType.from_type(Stop | Move)
>>> btype.to_bytes(Stop())
b'4:Stop'
>>> btype.to_bytes(Move(distance=3))
b'd4:Moved8:distancei3eee'
>>> btype.from_bytes(b'd4:Moved8:distancei3eee')
Move(distance=3)
"""

from __future__ import annotations

from typing import Any, NamedTuple, TypeVar, get_args, get_origin

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.btypes.dataclass_btype import DataclassBType
from bencodec.btypes.utils import is_union, pretty_type
from bencodec.compound_encoding import Decoder
from bencodec.compound_encoding.variant import decode_variant, encode_unit_variant, encode_variant
from bencodec.exceptions import UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer
from bencodec.utils.typing import resolve_newtype

T = TypeVar('T')


class _Member(NamedTuple):
    name: bytes
    class_: type
    btype: BType


def _member_class(type_: Any) -> type:
    origin = resolve_newtype(get_origin(type_) or type_)
    if not isinstance(origin, type):
        raise UnsupportedTypeError(f'type {pretty_type(type_)} cannot be a tagged union member')
    return origin


class VariantBType(BType[T]):
    __slots__ = ('_is_hashable', '_members', '_units', '_payload_decoders')

    _members: tuple[_Member, ...]
    _units: dict[bytes, Any]
    _payload_decoders: dict[bytes, Decoder[Any]]

    def __init__(self, members: tuple[_Member, ...]) -> None:
        self._members = members
        self._is_hashable = all(member.btype.is_hashable() for member in members)
        self._units = {}
        self._payload_decoders = {}
        for member in members:
            if member.name in self._units or member.name in self._payload_decoders:
                raise UnsupportedTypeError(f'more than one member named {member.name.decode()!r}')
            if isinstance(member.btype, DataclassBType) and member.btype.is_unit():
                self._units[member.name] = member.btype.build_unit()
            else:
                self._payload_decoders[member.name] = member.btype.deserialize

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_union(type_):
            raise UnsupportedTypeError('expected a union type')
        args = get_args(type_)
        if type(None) in args:
            raise UnsupportedTypeError('a union with None is an optional, not a tagged union')
        members = []
        for arg in args:
            class_ = _member_class(arg)
            btype = BType.from_type(arg, type_map=type_map)
            members.append(_Member(class_.__name__.encode('utf-8'), class_, btype))
        return cls(tuple(members))

    def _find_member(self, value: Any) -> _Member:
        # exact class first, so a subclass that is also a member isn't shadowed by its base
        for member in self._members:
            if type(value) is member.class_:
                return member
        for member in self._members:
            if isinstance(value, member.class_):
                return member
        expected = ', '.join(member.class_.__name__ for member in self._members)
        raise UnsupportedTypeError(f'expected one of {expected}, got {type(value).__name__}')

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        member = self._find_member(value)
        member.btype._check_value(value, deep=deep)

    @override
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        member = self._find_member(value)
        if member.name in self._units:
            encode_unit_variant(serializer, member.name)
        else:
            encode_variant(serializer, member.name, value, member.btype.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        return decode_variant(deserializer, self._units, self._payload_decoders)
