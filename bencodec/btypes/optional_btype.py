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

from functools import reduce
from operator import or_
from types import NoneType
from typing import Any, TypeVar, get_args

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.btypes.utils import is_union
from bencodec.exceptions import UnsupportedShapeError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer

V = TypeVar('V')


class OptionalBType(BType[V | None]):
    """ Represents a value that is either `V` or `None`.

    Bencode has no null, so `None` is represented by omitting the entry of the record (or map) that holds the value.
    In any other position (top-level, list items, tuple items) there is no way to represent an absent value, so an
    optional type there is an `UnsupportedShapeError` both when encoding and when decoding. Records and maps use the
    inner BType (`entry_btype`) for the entries that are present.
    """

    __slots__ = ('_is_hashable', '_value')

    _value: BType[V]

    def __init__(self, btype: BType[V]) -> None:
        self._value = btype
        self._is_hashable = btype.is_hashable()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_union(type_):
            raise UnsupportedTypeError('expected type union')
        args = get_args(type_)
        assert args, 'union always has args'
        if NoneType not in args:
            raise UnsupportedTypeError('type must be either `None | T` or `T | None`')
        not_none_args = [arg for arg in args if arg is not NoneType]
        # `A | B | None` is an optional tagged union
        not_none_type = reduce(or_, not_none_args)
        return cls(BType.from_type(not_none_type, type_map=type_map))

    @override
    def is_optional(self) -> bool:
        return True

    @override
    def entry_btype(self) -> BType[V]:
        return self._value

    @override
    def _check_value(self, value: V | None, /, *, deep: bool) -> None:
        if value is None:
            raise UnsupportedShapeError('None can only be represented by omitting a dictionary entry')
        raise UnsupportedShapeError('an optional value can only be held by a record or map entry')

    @override
    def _serialize(self, serializer: Serializer, value: V | None, /) -> None:
        raise UnsupportedShapeError('an optional value can only be held by a record or map entry')

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> V | None:
        raise UnsupportedShapeError(
            'an optional value can only be held by a record or map entry',
            offset=deserializer.cur_pos(),
        )
