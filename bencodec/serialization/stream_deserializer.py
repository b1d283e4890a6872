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

from typing import BinaryIO, Optional

from typing_extensions import override

from bencodec.consts import DEFAULT_MAX_DEPTH
from bencodec.exceptions import IoError

from .deserializer import Deserializer

# reads of big byte strings are made in chunks so a bogus length prefix doesn't allocate everything upfront
_CHUNK_SIZE = 64 * 1024


class StreamDeserializer(Deserializer):
    """Implementation of a Deserializer that pulls bytes from a readable binary file-like object.

    Only one byte of lookahead is kept, so nothing past the end of the decoded value is consumed from the reader,
    except for the single byte peeked when checking for trailing data. Every read copies, so values decoded from a
    stream always own their bytes.
    """

    def __init__(
        self,
        reader: BinaryIO,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_byte_string_length: Optional[int] = None,
    ) -> None:
        super().__init__(max_depth=max_depth, max_byte_string_length=max_byte_string_length)
        self._reader = reader
        self._peeked: Optional[int] = None
        self._pos = 0

    @property
    @override
    def borrows(self) -> bool:
        return False

    def _read(self, n: int) -> bytes:
        try:
            data = self._reader.read(n)
        except OSError as e:
            raise IoError(str(e), offset=self._pos) from e
        if data is None:
            # non-blocking readers return None when no data is available
            raise IoError('reader has no data available', offset=self._pos)
        return data

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def is_empty(self) -> bool:
        if self._peeked is not None:
            return False
        data = self._read(1)
        if not data:
            return True
        self._peeked = data[0]
        return False

    @override
    def peek_byte(self) -> int:
        if self.is_empty():
            raise self._eof()
        assert self._peeked is not None
        return self._peeked

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._peeked = None
        self._pos += 1
        return b

    @override
    def read_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        parts: list[bytes] = []
        missing = n
        if missing and self._peeked is not None:
            parts.append(bytes([self._peeked]))
            self._peeked = None
            missing -= 1
        while missing:
            chunk = self._read(min(missing, _CHUNK_SIZE))
            if not chunk:
                read = n - missing
                self._pos += read
                raise self._eof(f'expected {n} bytes, only {read} left')
            parts.append(chunk)
            missing -= len(chunk)
        self._pos += n
        return b''.join(parts)

