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
from typing import TYPE_CHECKING, BinaryIO, Iterator

from bencodec.consts import DEFAULT_MAX_DEPTH
from bencodec.exceptions import DepthLimitExceededError

from .types import Buffer

if TYPE_CHECKING:
    from .bytes_serializer import BytesSerializer
    from .stream_serializer import StreamSerializer


class Serializer(ABC):
    """ A byte sink.

    Besides writing bytes, a serializer keeps track of how deep the current container nesting is, so that encoders
    can refuse values nested deeper than `max_depth` (self-referencing lists included) instead of exhausting the stack.
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth
        self._depth = 0

    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the serializer cannot be reused after this."""
        raise TypeError('this serializer does not support finalization')

    @abstractmethod
    def cur_pos(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        """Write a single byte."""
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        # XXX: it is recommended that implementors of Serializer specialize this implementation
        for byte in bytes(memoryview(data)):
            self.write_byte(byte)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Must wrap the encoding of the items of every container."""
        if self._depth >= self.max_depth:
            raise DepthLimitExceededError(f'nesting deeper than {self.max_depth} levels')
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    @staticmethod
    def build_bytes_serializer(*, max_depth: int = DEFAULT_MAX_DEPTH) -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer(max_depth=max_depth)

    @staticmethod
    def build_stream_serializer(writer: BinaryIO, *, max_depth: int = DEFAULT_MAX_DEPTH) -> StreamSerializer:
        from .stream_serializer import StreamSerializer
        return StreamSerializer(writer, max_depth=max_depth)
