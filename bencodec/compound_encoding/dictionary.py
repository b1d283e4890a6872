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
A dictionary is a sequence of (key, value) pairs, where keys are byte strings.

Layout: d[key_0][value_0]...[key_N][value_N]e

The canonical form requires the keys to be unique and sorted by their raw bytes, the encoder sorts the entries before
writing anything and the decoder rejects anything that isn't canonical.

>>> from bencodec.encoding.utf8 import encode_utf8, decode_utf8
>>> from bencodec.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> value = {
...     b'spam': 'eggs',
...     b'cow': 'moo',
... }
>>> encode_dictionary(se, value.items(), encode_utf8)
>>> bytes(se.finalize())
b'd3:cow3:moo4:spam4:eggse'

The value decoder receives the key, so the decoding can depend on it:

>>> de = Deserializer.build_bytes_deserializer(b'd3:cow3:moo4:spam4:eggse')
>>> decode_dictionary(de, lambda key, de: decode_utf8(de).upper(), dict)
{b'cow': 'MOO', b'spam': 'EGGS'}
>>> de.finalize()

Keys out of order and repeated keys are rejected, the offset points at the offending key:

>>> de = Deserializer.build_bytes_deserializer(b'd4:spam4:eggs3:cow3:mooe')
>>> try:
...     decode_dictionary(de, lambda key, de: decode_utf8(de), dict)
... except InvalidDictionaryKeyOrderError as e:
...     print(e)
key b'cow' is not greater than b'spam' (at offset 13)

>>> de = Deserializer.build_bytes_deserializer(b'd3:cowi1e3:cowi2ee')
>>> try:
...     decode_dictionary(de, lambda key, de: decode_bool(de), dict)
... except DuplicateKeyError as e:
...     print(e)
duplicate key b'cow' (at offset 9)

Keys must be byte strings:

>>> de = Deserializer.build_bytes_deserializer(b'di1ei1ee')
>>> try:
...     decode_dictionary(de, lambda key, de: decode_bool(de), dict)
... except UnexpectedTokenError as e:
...     print(e)
expected byte string, found integer (at offset 1)

When encoding, duplicates are detected after sorting:

>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_dictionary(se, [(b'a', True), (b'a', False)], encode_bool)
... except DuplicateKeyError as e:
...     print(e)
duplicate key b'a'
"""

from collections.abc import Iterable, Iterator
from operator import itemgetter
from typing import Callable, Optional, TypeVar

from bencodec.consts import TOKEN_DICTIONARY, TOKEN_END
from bencodec.encoding.byte_string import decode_owned_byte_string, encode_byte_string
from bencodec.encoding.token import Token, expect_token
from bencodec.exceptions import DuplicateKeyError, InvalidDictionaryKeyOrderError, UnexpectedTokenError  # noqa: F401
from bencodec.serialization import Deserializer, Serializer

from . import Encoder, KeyedDecoder

T = TypeVar('T')
R = TypeVar('R')


def encode_dictionary(serializer: Serializer, items: Iterable[tuple[bytes, T]], value_encoder: Encoder[T]) -> None:
    """ Encode (key, value) pairs as a dictionary, the pairs don't have to be sorted.
    """
    sorted_items = sorted(items, key=itemgetter(0))
    for (prev_key, _), (key, _) in zip(sorted_items, sorted_items[1:]):
        if prev_key == key:
            raise DuplicateKeyError(f'duplicate key {key!r}')
    with serializer.nested():
        serializer.write_byte(TOKEN_DICTIONARY)
        for key, value in sorted_items:
            encode_byte_string(serializer, key)
            value_encoder(serializer, value)
        serializer.write_byte(TOKEN_END)


def _iter_entries(deserializer: Deserializer, value_decoder: KeyedDecoder[T]) -> Iterator[tuple[bytes, T]]:
    prev_key: Optional[bytes] = None
    while deserializer.peek_byte() != TOKEN_END:
        pos = deserializer.cur_pos()
        expect_token(deserializer, Token.BYTE_STRING)
        key = decode_owned_byte_string(deserializer)
        if prev_key is not None:
            if key == prev_key:
                raise DuplicateKeyError(f'duplicate key {key!r}', offset=pos)
            if key < prev_key:
                raise InvalidDictionaryKeyOrderError(f'key {key!r} is not greater than {prev_key!r}', offset=pos)
        yield key, value_decoder(key, deserializer)
        prev_key = key
    deserializer.read_byte()


def decode_dictionary(
    deserializer: Deserializer,
    value_decoder: KeyedDecoder[T],
    builder: Callable[[Iterable[tuple[bytes, T]]], R],
) -> R:
    """ Decode a canonical dictionary, keys are always returned as `bytes`.
    """
    expect_token(deserializer, Token.DICTIONARY)
    with deserializer.nested():
        deserializer.read_byte()
        return builder(_iter_entries(deserializer, value_decoder))
