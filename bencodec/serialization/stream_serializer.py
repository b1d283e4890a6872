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

from typing import BinaryIO

from typing_extensions import override

from bencodec.consts import DEFAULT_MAX_DEPTH
from bencodec.exceptions import IoError

from .serializer import Serializer
from .types import Buffer


class StreamSerializer(Serializer):
    """Implementation of Serializer that writes straight into a writable binary file-like object.

    Writes are not buffered nor rolled back, if encoding fails midway the writer is left with a partial output.
    """

    def __init__(self, writer: BinaryIO, *, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        super().__init__(max_depth=max_depth)
        self._writer = writer
        self._pos = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self.write_bytes(int.to_bytes(data, length=1, byteorder='big'))

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data)
        try:
            # BufferedWriter.write always writes everything, raw writers may not, so loop until done
            while view:
                written = self._writer.write(view)
                if written is None:
                    raise IoError('writer would block', offset=self._pos)
                self._pos += written
                view = view[written:]
        except OSError as e:
            raise IoError(str(e), offset=self._pos) from e
