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

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, BinaryIO, Iterator, Optional, overload

from typing_extensions import Self

from bencodec.consts import DEFAULT_MAX_DEPTH
from bencodec.exceptions import DepthLimitExceededError, EofError, TrailingDataError, UnexpectedTokenError

from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxBytesDeserializer
    from .bytes_deserializer import BytesDeserializer
    from .stream_deserializer import StreamDeserializer


class Deserializer(ABC):
    """ A byte source that knows its current offset.

    Every error raised by a deserializer carries the offset at which it happened, decoders are expected to do the same
    by using `cur_pos()`.
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH, max_byte_string_length: Optional[int] = None) -> None:
        self.max_depth = max_depth
        self.max_byte_string_length = max_byte_string_length
        self._depth = 0

    def finalize(self) -> None:
        """Check that all bytes were consumed, the deserializer cannot be used after this."""
        if not self.is_empty():
            raise TrailingDataError('trailing data', offset=self.cur_pos())

    @staticmethod
    def build_bytes_deserializer(
        data: Buffer,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_byte_string_length: Optional[int] = None,
    ) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data, max_depth=max_depth, max_byte_string_length=max_byte_string_length)

    @staticmethod
    def build_stream_deserializer(
        reader: BinaryIO,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_byte_string_length: Optional[int] = None,
    ) -> StreamDeserializer:
        from .stream_deserializer import StreamDeserializer
        return StreamDeserializer(reader, max_depth=max_depth, max_byte_string_length=max_byte_string_length)

    @property
    @abstractmethod
    def borrows(self) -> bool:
        """Whether `read_bytes` returns views into storage owned by the caller (zero-copy)."""
        raise NotImplementedError

    @abstractmethod
    def cur_pos(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> int:
        """Read a single byte but don't consume from buffer."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int) -> Buffer:
        """Read exactly n bytes, errors if there isn't enough data"""
        # XXX: this is a blanket implementation that is an example of the behavior, this implementation has to be
        #      explicitly used if needed
        def iter_bytes() -> Iterator[int]:
            for _ in range(n):
                yield self.read_byte()
        return bytes(iter_bytes())

    def expect_byte(self, expected: int) -> None:
        """Consume one byte that must be `expected`, raises EofError if there is nothing to read."""
        pos = self.cur_pos()
        byte = self.read_byte()
        if byte != expected:
            raise UnexpectedTokenError(f'expected {chr(expected)!r}, found {bytes([byte])!r}', offset=pos)

    def _eof(self, what: str = 'not enough bytes to read') -> EofError:
        return EofError(what, offset=self.cur_pos())

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Must wrap the decoding of the items of every container."""
        if self._depth >= self.max_depth:
            raise DepthLimitExceededError(f'nesting deeper than {self.max_depth} levels', offset=self.cur_pos())
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def with_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        """Helper method to wrap the current deserializer with MaxBytesDeserializer."""
        from .adapters import MaxBytesDeserializer
        return MaxBytesDeserializer(self, max_bytes)

    @overload
    def with_optional_max_bytes(self, max_bytes: None) -> Self:
        ...

    @overload
    def with_optional_max_bytes(self, max_bytes: int) -> MaxBytesDeserializer[Self]:
        ...

    def with_optional_max_bytes(self, max_bytes: int | None) -> Self | MaxBytesDeserializer[Self]:
        """Helper method to optionally wrap the current deserializer."""
        if max_bytes is None:
            return self
        return self.with_max_bytes(max_bytes)
