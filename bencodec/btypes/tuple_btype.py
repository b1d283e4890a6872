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
from typing import Any, get_args, get_origin

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.compound_encoding.list import decode_list, encode_list
from bencodec.compound_encoding.tuple import decode_tuple, encode_tuple
from bencodec.exceptions import UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer


class TupleBType(BType[tuple]):
    """ Represents tuple values, which can either be homogeneous-type variable size or heterogeneous-type fixed size.

    Both are encoded as lists, a fixed size tuple must have exactly as many items as its type has arguments.
    """

    __slots__ = ('_is_hashable', '_varsize', '_args')

    _varsize: bool
    _args: tuple[BType, ...]

    def __init__(self, args: BType | Iterable[BType]) -> None:
        if isinstance(args, BType):
            self._varsize = True
            self._args = (args,)
            self._is_hashable = args.is_hashable()
        else:
            self._varsize = False
            self._args = tuple(args)
            for arg in self._args:
                assert isinstance(arg, BType)
            self._is_hashable = all(arg_btype.is_hashable() for arg_btype in self._args)

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        origin_type: type = get_origin(type_) or type_
        if not issubclass(origin_type, tuple):
            raise UnsupportedTypeError('expected tuple type')
        args = list(get_args(type_))
        if not args:
            raise UnsupportedTypeError('expected tuple[<args...>]')
        if args[-1] is Ellipsis:
            if len(args) != 2:
                raise UnsupportedTypeError('ellipsis only allowed with one type: tuple[T, ...]')
            arg, _ellipsis = args
            return cls(BType.from_type(arg, type_map=type_map))
        else:
            return cls(BType.from_type(arg, type_map=type_map) for arg in args)

    @override
    def _check_value(self, value: tuple, /, *, deep: bool) -> None:
        if not isinstance(value, (tuple, list)):
            raise UnsupportedTypeError(f'expected tuple, got {type(value).__name__}')
        if not self._varsize and len(value) != len(self._args):
            raise UnsupportedTypeError(f'expected a tuple of {len(self._args)} items, got {len(value)}')
        if deep:
            if self._varsize:
                arg_btype, = self._args
                for i in value:
                    arg_btype._check_value(i, deep=True)
            else:
                for i, arg_btype in zip(value, self._args):
                    arg_btype._check_value(i, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: tuple, /) -> None:
        if self._varsize:
            encode_list(serializer, value, self._args[0].serialize)
        else:
            encode_tuple(serializer, value, tuple(i.serialize for i in self._args))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple:
        if self._varsize:
            return decode_list(deserializer, self._args[0].deserialize, tuple)
        else:
            return decode_tuple(deserializer, tuple(i.deserialize for i in self._args))
