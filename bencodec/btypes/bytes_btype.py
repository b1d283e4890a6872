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

from typing import Any, Callable

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.encoding.byte_string import decode_owned_byte_string, encode_byte_string
from bencodec.exceptions import UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer
from bencodec.utils.typing import is_subclass


class BytesBType(BType[bytes]):
    """ Represents `bytes` values, or values of a `NewType` over `bytes`.
    """

    __slots__ = ('_actual_type',)
    _is_hashable = True
    _actual_type: Callable[[bytes], bytes]

    def __init__(self, actual_type: Callable[[bytes], bytes] = bytes) -> None:
        self._actual_type = actual_type

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not is_subclass(type_, bytes):
            raise UnsupportedTypeError('expected bytes-like type')
        return cls(type_)

    @override
    def _check_value(self, value: bytes, /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise UnsupportedTypeError(f'expected bytes, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: bytes, /) -> None:
        encode_byte_string(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bytes:
        return self._actual_type(decode_owned_byte_string(deserializer))
