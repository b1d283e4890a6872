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
from collections import deque
from collections.abc import Collection, Hashable, Iterable, Set
from typing import Any, TypeVar, get_args, get_origin

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.btypes.utils import is_origin_hashable
from bencodec.compound_encoding.list import decode_list, encode_list
from bencodec.exceptions import UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _CollectionBType(BType[Collection[T]], ABC):
    """ Used as base for BType classes that represent homogeneous collections, all encoded as lists.
    """
    __slots__ = ('_item',)

    _is_hashable = False
    _item: BType[T]

    def __init__(self, item_btype: BType[T], /) -> None:
        self._item = item_btype

    @abstractmethod
    def _build(self, items: Iterable[T]) -> Collection[T]:
        """ How to build the concrete collection from an iterable of items.
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        member_btype = BType.from_type(member_type, type_map=type_map)
        return cls(member_btype)

    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Collection):
            raise UnsupportedTypeError('expected Collection type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise UnsupportedTypeError(f'expected {origin_type.__name__}[<type>]')
        return args[0]

    def _check_item(self, item: T) -> None:
        self._item._check_value(item, deep=True)

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes)):
            raise UnsupportedTypeError(f'expected Collection, got {type(value).__name__}')
        if deep:
            for i in value:
                self._check_item(i)

    @override
    def _serialize(self, serializer: Serializer, value: Collection[T], /) -> None:
        encode_list(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Collection[T]:
        return decode_list(deserializer, self._item.deserialize, self._build)


class ListBType(_CollectionBType[T]):
    """ Represents builtin `list` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)


class DequeBType(_CollectionBType[T]):
    """ Represents builtin `collections.deque` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> deque[T]:
        return deque(items)


class SetBType(_CollectionBType[H]):
    """ Represents builtin `set` values.

    Bencode lists are ordered, so the members are written sorted when they can be compared, which makes the output
    deterministic.
    """

    @override
    def _build(self, items: Iterable[H]) -> Set[H]:
        return set(items)

    @override
    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        member_type = super()._get_member_type(type_)
        if not is_origin_hashable(member_type):
            raise UnsupportedTypeError(f'{member_type} is not hashable')
        return member_type

    @override
    def _check_item(self, item: H) -> None:
        if not isinstance(item, Hashable):
            raise UnsupportedTypeError('expected Hashable type')
        super()._check_item(item)

    @override
    def _serialize(self, serializer: Serializer, value: Collection[H], /) -> None:
        try:
            items: Iterable[H] = sorted(value)  # type: ignore[type-var]
        except TypeError:
            items = value
        encode_list(serializer, items, self._item.serialize)


class FrozenSetBType(SetBType[H]):
    """ Represents builtin `frozenset` values.
    """

    # XXX: SetBType already enforces H to be hashable, but is not itself hashable, a frozenset, however, is hashable
    _is_hashable = True

    @override
    def _build(self, items: Iterable[H]) -> frozenset[H]:
        return frozenset(items)
