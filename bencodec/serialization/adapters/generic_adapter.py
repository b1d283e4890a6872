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

from contextlib import AbstractContextManager
from typing import Generic, TypeVar

from typing_extensions import override

from bencodec.serialization.deserializer import Deserializer

from ..types import Buffer

D = TypeVar('D', bound=Deserializer)


class GenericDeserializerAdapter(Deserializer, Generic[D]):
    inner: D

    def __init__(self, deserializer: D) -> None:
        super().__init__(
            max_depth=deserializer.max_depth,
            max_byte_string_length=deserializer.max_byte_string_length,
        )
        self.inner = deserializer

    @override
    def finalize(self) -> None:
        return self.inner.finalize()

    @property
    @override
    def borrows(self) -> bool:
        return self.inner.borrows

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def is_empty(self) -> bool:
        return self.inner.is_empty()

    @override
    def peek_byte(self) -> int:
        return self.inner.peek_byte()

    @override
    def read_byte(self) -> int:
        return self.inner.read_byte()

    @override
    def read_bytes(self, n: int) -> Buffer:
        return self.inner.read_bytes(n)

    @override
    def nested(self) -> AbstractContextManager[None]:
        return self.inner.nested()
