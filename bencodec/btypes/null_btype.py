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

from types import NoneType
from typing import Any

from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.encoding.byte_string import decode_byte_string_length, encode_byte_string
from bencodec.exceptions import UnexpectedTokenError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer


class NullBType(BType[None]):
    """ Represents `None` as a standalone type (the unit type), encoded as the empty byte string `0:`.

    This is not how optional values are represented, see `OptionalBType` for that.
    """

    _is_hashable = True

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        # XXX: usually we expect NoneType as type_, but in some cases it can come-in as None, and we take that too
        if type_ is None or type_ is NoneType:
            return cls()
        raise UnsupportedTypeError('expected None type')

    @override
    def _check_value(self, value: None, /, *, deep: bool) -> None:
        if value is not None:
            raise UnsupportedTypeError(f'expected None, got {type(value).__name__}')

    @override
    def _serialize(self, serializer: Serializer, value: None, /) -> None:
        encode_byte_string(serializer, b'')

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> None:
        pos = deserializer.cur_pos()
        if decode_byte_string_length(deserializer) != 0:
            raise UnexpectedTokenError('expected empty byte string', offset=pos)
