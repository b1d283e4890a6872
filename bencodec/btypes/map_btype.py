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

from collections import OrderedDict
from collections.abc import Hashable, Iterable, Mapping
from typing import Any, TypeVar, get_args, get_origin

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.btypes.bytes_btype import BytesBType
from bencodec.btypes.str_btype import StrBType
from bencodec.btypes.utils import is_origin_hashable
from bencodec.compound_encoding.dictionary import decode_dictionary, encode_dictionary
from bencodec.encoding.utf8 import utf8_bytes
from bencodec.exceptions import InvalidUtf8Error, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class DictBType(BType[Mapping[H, T]]):
    """ Represents builtin `dict` values, keys must be `str` or `bytes` (or a `NewType` of those).

    Entries are written sorted by the raw bytes of their keys. Entries whose value is `None` are omitted when the value
    type is optional, and absent entries are simply not present after decoding.
    """

    __slots__ = ('_key', '_value')

    _key: BType[H]
    _value: BType[T]
    _is_hashable = False

    def __init__(self, key: BType[H], value: BType[T]) -> None:
        if not isinstance(key, (BytesBType, StrBType)):
            raise UnsupportedTypeError('dictionary keys must be str or bytes')
        self._key = key
        self._value = value

    def _build(self, items: Iterable[tuple[H, T]]) -> Mapping[H, T]:
        """ How to build the concrete map from an iterable of (key, value).
        """
        return dict(items)

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, Mapping):
            raise UnsupportedTypeError('expected Mapping type')
        args = get_args(type_)
        if not args or len(args) != 2:
            raise UnsupportedTypeError(f'expected {origin_type.__name__}[<key type>, <value type>]')
        key_type, value_type = args
        if not is_origin_hashable(key_type):
            raise UnsupportedTypeError(f'{key_type} is not hashable')
        key_btype = BType.from_type(key_type, type_map=type_map)
        assert key_btype.is_hashable(), 'hashable "types" must produce hashable "values"'
        return cls(key_btype, BType.from_type(value_type, type_map=type_map))

    def _key_to_bytes(self, key: H) -> bytes:
        if isinstance(key, str):
            return utf8_bytes(key)
        return bytes(key)  # type: ignore[arg-type]

    def _bytes_to_key(self, key: bytes, deserializer: Deserializer) -> H:
        if isinstance(self._key, StrBType):
            try:
                return str(key, 'utf-8')  # type: ignore[return-value]
            except UnicodeDecodeError as e:
                raise InvalidUtf8Error(f'invalid utf-8 in dictionary key {key!r}', offset=deserializer.cur_pos()) from e
        return self._key._actual_type(key)  # type: ignore[union-attr,return-value]

    @override
    def _check_value(self, value: Mapping[H, T], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise UnsupportedTypeError(f'expected Mapping, got {type(value).__name__}')
        if deep:
            for k, v in value.items():
                self._key._check_value(k, deep=True)
                if v is None and self._value.is_optional():
                    continue
                self._value.entry_btype()._check_value(v, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: Mapping[H, T], /) -> None:
        items = []
        for k, v in value.items():
            self._key.check_value(k)
            if v is None and self._value.is_optional():
                continue
            items.append((self._key_to_bytes(k), v))
        encode_dictionary(serializer, items, self._value.entry_btype().serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Mapping[H, T]:
        entry_btype = self._value.entry_btype()

        def decode_entry(key: bytes, de: Deserializer) -> tuple[H, T]:
            return self._bytes_to_key(key, de), entry_btype.deserialize(de)
        return decode_dictionary(deserializer, decode_entry, lambda entries: self._build(v for _, v in entries))


class OrderedDictBType(DictBType[H, T]):
    """ Represents `collections.OrderedDict` values, in key order.
    """

    @override
    def _build(self, items: Iterable[tuple[H, T]]) -> OrderedDict[H, T]:
        return OrderedDict(items)
