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

from typing import Optional

from typing_extensions import override

from bencodec.consts import DEFAULT_MAX_DEPTH

from .deserializer import Deserializer
from .types import Buffer


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation maintains a read-only memoryview that is shortened as the bytes are read. The views returned by
    `read_bytes` point into the caller's buffer, nothing is copied.
    """

    def __init__(
        self,
        data: Buffer,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_byte_string_length: Optional[int] = None,
    ) -> None:
        super().__init__(max_depth=max_depth, max_byte_string_length=max_byte_string_length)
        self._view = memoryview(data).cast('B').toreadonly()
        self._size = len(self._view)

    @property
    @override
    def borrows(self) -> bool:
        return True

    @override
    def cur_pos(self) -> int:
        return self._size - len(self._view)

    @override
    def is_empty(self) -> bool:
        # XXX: least amount of OPs, "not" converts to bool with the correct semantics of "is empty"
        return not self._view

    @override
    def peek_byte(self) -> int:
        if not len(self._view):
            raise self._eof()
        return self._view[0]

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._view = self._view[1:]
        return b

    @override
    def read_bytes(self, n: int) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        if len(self._view) < n:
            raise self._eof(f'expected {n} bytes, only {len(self._view)} left')
        b = self._view[:n]
        self._view = self._view[n:]
        return b

