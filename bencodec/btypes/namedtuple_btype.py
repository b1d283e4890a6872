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

from collections.abc import Iterable
from typing import Any, TypeVar, get_type_hints

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.btypes.utils import is_namedtuple
from bencodec.compound_encoding.tuple import decode_tuple, encode_tuple
from bencodec.exceptions import UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer

N = TypeVar('N', bound=tuple)


class NamedTupleBType(BType[N]):
    """ Represents `typing.NamedTuple` classes, encoded like a fixed size tuple (a list in field order).
    """

    __slots__ = ('_is_hashable', '_args', '_actual_type')

    _args: tuple[BType, ...]
    _actual_type: type[N]

    def __init__(self, namedtuple: type[N], args: Iterable[BType]) -> None:
        self._actual_type = namedtuple
        self._args = tuple(args)
        self._is_hashable = all(arg_btype.is_hashable() for arg_btype in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_namedtuple(type_):
            raise UnsupportedTypeError('expected NamedTuple type')
        type_hints = get_type_hints(type_)
        missing = [field_name for field_name in type_._fields if field_name not in type_hints]
        if missing:
            raise UnsupportedTypeError(f'fields without annotation: {", ".join(missing)}')
        args = [type_hints[field_name] for field_name in type_._fields]
        return cls(type_, (BType.from_type(arg, type_map=type_map) for arg in args))

    @override
    def _check_value(self, value: N, /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise UnsupportedTypeError(f'expected {self._actual_type.__name__}, got {type(value).__name__}')
        if len(value) != len(self._args):
            raise UnsupportedTypeError('wrong number of arguments')
        if deep:
            for i, arg_btype in zip(value, self._args):
                arg_btype._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: N, /) -> None:
        encode_tuple(serializer, value, tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> N:
        return self._actual_type(*decode_tuple(deserializer, tuple(i.deserialize for i in self._args)))
