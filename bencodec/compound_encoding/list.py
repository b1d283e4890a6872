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

r"""
A list is any iterable of values that are encoded with the same encoder.

Layout: l[value_0]...[value_N]e

>>> from bencodec.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> value = ['spam', 'eggs', 'π']
>>> encode_list(se, value, encode_utf8)
>>> bytes(se.finalize())
b'l4:spam4:eggs2:\xcf\x80e'

When decoding, the builder can be any compatible collection, in the previous example a `list` was encoded, but when
decoding a `tuple` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> de = Deserializer.build_bytes_deserializer(b'l4:spam4:eggs2:\xcf\x80e')
>>> decode_list(de, decode_utf8, tuple)
('spam', 'eggs', 'π')
>>> de.finalize()

Nesting is limited by the serializer/deserializer `max_depth`:

>>> de = Deserializer.build_bytes_deserializer(b'llleee', max_depth=2)
>>> def decode_nested(de):
...     return decode_list(de, decode_nested, list)
>>> try:
...     decode_nested(de)
... except DepthLimitExceededError as e:
...     print(e)
nesting deeper than 2 levels (at offset 2)

A list that isn't closed is an EOF:

>>> try:
...     decode_list(Deserializer.build_bytes_deserializer(b'l4:spam'), decode_utf8, list)
... except EofError as e:
...     print(e)
not enough bytes to read (at offset 7)
"""

from collections.abc import Iterable, Iterator
from typing import Callable, TypeVar

from bencodec.consts import TOKEN_END, TOKEN_LIST
from bencodec.encoding.token import Token, expect_token
from bencodec.exceptions import DepthLimitExceededError, EofError  # noqa: F401
from bencodec.serialization import Deserializer, Serializer

from . import Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R')


def encode_list(serializer: Serializer, values: Iterable[T], encoder: Encoder[T]) -> None:
    with serializer.nested():
        serializer.write_byte(TOKEN_LIST)
        for value in values:
            encoder(serializer, value)
        serializer.write_byte(TOKEN_END)


def _iter_items(deserializer: Deserializer, decoder: Decoder[T]) -> Iterator[T]:
    while deserializer.peek_byte() != TOKEN_END:
        yield decoder(deserializer)
    deserializer.read_byte()


def decode_list(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Callable[[Iterable[T]], R],
) -> R:
    expect_token(deserializer, Token.LIST)
    with deserializer.nested():
        deserializer.read_byte()
        return builder(_iter_items(deserializer, decoder))
