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

from typing import Any

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.compound_encoding.value import decode_value, encode_value
from bencodec.exceptions import UnexpectedTokenError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer
from bencodec.utils.typing import is_subclass
from bencodec.value import Value


class ValueBType(BType[Value]):
    """ Represents a dynamic `Value`, anything well-formed is accepted.

    This is useful for fields whose shape is not known in advance. Values are always decoded as owned. Annotating with
    a subclass (`List`, `Dictionary`, ...) restricts the accepted kind.
    """

    __slots__ = ('_actual_type',)
    _is_hashable = False
    _actual_type: type[Value]

    def __init__(self, actual_type: type[Value] = Value) -> None:
        self._actual_type = actual_type

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_subclass(type_, Value):
            raise UnsupportedTypeError('expected Value type')
        return cls(type_)

    @override
    def _check_value(self, value: Value, /, *, deep: bool) -> None:
        if not isinstance(value, self._actual_type):
            raise UnsupportedTypeError(f'expected {self._actual_type.__name__}, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: Value, /) -> None:
        encode_value(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Value:
        pos = deserializer.cur_pos()
        value = decode_value(deserializer)
        if not isinstance(value, self._actual_type):
            raise UnexpectedTokenError(f'expected {self._actual_type.__name__}, got {type(value).__name__}', offset=pos)
        return value
