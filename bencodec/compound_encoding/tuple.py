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
A tuple is a list with a fixed number of items, each with its own encoder.

Layout: l[value_0]...[value_N]e, where N is known in advance

>>> from bencodec.encoding.utf8 import encode_utf8, decode_utf8
>>> from bencodec.encoding.integer import encode_integer, decode_integer
>>> se = Serializer.build_bytes_serializer()
>>> encode_tuple(se, ('spam', 3), (encode_utf8, encode_integer))
>>> bytes(se.finalize())
b'l4:spami3ee'

>>> de = Deserializer.build_bytes_deserializer(b'l4:spami3ee')
>>> decode_tuple(de, (decode_utf8, decode_integer))
('spam', 3)
>>> de.finalize()

The number of items must match exactly:

>>> for data in [b'l4:spame', b'l4:spami3ei4ee']:
...     try:
...         decode_tuple(Deserializer.build_bytes_deserializer(data), (decode_utf8, decode_integer))
...     except UnexpectedTokenError as e:
...         print(e)
expected 2 items, found 1 (at offset 7)
expected 2 items, found more (at offset 10)
"""

from collections.abc import Iterable
from typing import Any

from bencodec.consts import TOKEN_END, TOKEN_LIST
from bencodec.encoding.token import Token, expect_token
from bencodec.exceptions import UnexpectedTokenError
from bencodec.serialization import Deserializer, Serializer

from . import Decoder, Encoder


def encode_tuple(serializer: Serializer, values: Iterable[Any], encoders: tuple[Encoder, ...]) -> None:
    values = tuple(values)
    assert len(values) == len(encoders)
    with serializer.nested():
        serializer.write_byte(TOKEN_LIST)
        for value, encoder in zip(values, encoders):
            encoder(serializer, value)
        serializer.write_byte(TOKEN_END)


def decode_tuple(deserializer: Deserializer, decoders: tuple[Decoder, ...]) -> tuple:
    expect_token(deserializer, Token.LIST)
    items = []
    with deserializer.nested():
        deserializer.read_byte()
        for i, decoder in enumerate(decoders):
            if deserializer.peek_byte() == TOKEN_END:
                raise UnexpectedTokenError(f'expected {len(decoders)} items, found {i}', offset=deserializer.cur_pos())
            items.append(decoder(deserializer))
        if deserializer.peek_byte() != TOKEN_END:
            raise UnexpectedTokenError(f'expected {len(decoders)} items, found more', offset=deserializer.cur_pos())
        deserializer.read_byte()
    return tuple(items)
