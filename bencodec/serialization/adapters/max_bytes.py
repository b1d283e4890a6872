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

from typing import TypeVar

from typing_extensions import override

from bencodec.exceptions import MaxBytesExceededError
from bencodec.serialization.deserializer import Deserializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter

D = TypeVar('D', bound=Deserializer)


class MaxBytesDeserializer(GenericDeserializerAdapter[D]):
    def __init__(self, deserializer: D, max_bytes: int) -> None:
        super().__init__(deserializer)
        self._max_bytes = max_bytes
        self._bytes_left = max_bytes

    def _check_update_exceeds(self, read_size: int) -> None:
        if self._bytes_left < read_size:
            raise MaxBytesExceededError(f'input exceeds {self._max_bytes} bytes', offset=self.cur_pos())
        self._bytes_left -= read_size

    @override
    def peek_byte(self) -> int:
        if self._bytes_left < 1:
            raise MaxBytesExceededError(f'input exceeds {self._max_bytes} bytes', offset=self.cur_pos())
        return super().peek_byte()

    @override
    def read_byte(self) -> int:
        self._check_update_exceeds(1)
        return super().read_byte()

    @override
    def read_bytes(self, n: int) -> Buffer:
        self._check_update_exceeds(n)
        return super().read_bytes(n)
