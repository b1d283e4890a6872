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

from typing import Any, ClassVar

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.encoding.integer import decode_integer, encode_integer
from bencodec.exceptions import IntegerOverflowError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer
from bencodec.utils.typing import is_subclass


class _SizedIntBType(BType[int]):
    """ Base class for classes that represent builtin `int` values with a fixed size and signedness.

    The size only determines the accepted range, the encoding is always the decimal integer token.
    """

    _is_hashable = True
    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _byte_size: ClassVar[int]

    @classmethod
    def _upper_bound_value(cls) -> int:
        if cls._signed:
            return 2**(cls._byte_size * 8 - 1) - 1
        else:
            return 2**(cls._byte_size * 8) - 1

    @classmethod
    def _lower_bound_value(cls) -> int:
        if cls._signed:
            return -(2**(cls._byte_size * 8 - 1))
        else:
            return 0

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if type_ is bool or not is_subclass(type_, int):
            raise UnsupportedTypeError('expected int type')
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise UnsupportedTypeError(f'expected int, got {type(value).__name__}')
        lower_bound = self._lower_bound_value()
        upper_bound = self._upper_bound_value()
        if not (lower_bound <= value <= upper_bound):
            raise IntegerOverflowError(f'{value} is out of range [{lower_bound}, {upper_bound}]')

    @override
    def _serialize(self, serializer: Serializer, value: int, /) -> None:
        encode_integer(serializer, value, min_value=self._lower_bound_value(), max_value=self._upper_bound_value())

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        return decode_integer(deserializer, min_value=self._lower_bound_value(), max_value=self._upper_bound_value())


class Int8BType(_SizedIntBType):
    _signed = True
    _byte_size = 1


class Int16BType(_SizedIntBType):
    _signed = True
    _byte_size = 2


class Int32BType(_SizedIntBType):
    _signed = True
    _byte_size = 4


class Int64BType(_SizedIntBType):
    _signed = True
    _byte_size = 8


class Uint8BType(_SizedIntBType):
    _signed = False
    _byte_size = 1


class Uint16BType(_SizedIntBType):
    _signed = False
    _byte_size = 2


class Uint32BType(_SizedIntBType):
    _signed = False
    _byte_size = 4


class Uint64BType(_SizedIntBType):
    _signed = False
    _byte_size = 8
