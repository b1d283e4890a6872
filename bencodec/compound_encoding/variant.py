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
Externally tagged variants, used for enumerations and tagged unions.

Layout:

    [name] for a unit-like variant (a bare byte string)
    d[name][payload]e for a variant that carries data (a dictionary with exactly one entry)

>>> from bencodec.encoding.integer import encode_integer, decode_integer
>>> se = Serializer.build_bytes_serializer()
>>> encode_unit_variant(se, b'Stop')
>>> encode_variant(se, b'Move', 42, encode_integer)
>>> bytes(se.finalize())
b'4:Stopd4:Movei42ee'

Decoding needs the known unit-like variants and a decoder for each data-carrying variant:

>>> units = {b'Stop': 'stop'}
>>> payloads = {b'Move': lambda de: ('move', decode_integer(de))}
>>> de = Deserializer.build_bytes_deserializer(b'4:Stopd4:Movei42ee')
>>> decode_variant(de, units, payloads)
'stop'
>>> decode_variant(de, units, payloads)
('move', 42)
>>> de.finalize()

Any other shape is invalid:

>>> for data in [b'4:Jump', b'de', b'd4:Stopi1ee', b'd4:Movei1e4:Stopi1ee', b'i1e', b'le']:
...     try:
...         decode_variant(Deserializer.build_bytes_deserializer(data), units, payloads)
...     except InvalidVariantEncodingError as e:
...         print(e)
unknown variant b'Jump' (at offset 0)
empty dictionary is not a variant (at offset 0)
unit variant b'Stop' has no payload (at offset 1)
variant dictionary has more than one entry (at offset 10)
expected byte string or dictionary, found integer (at offset 0)
expected byte string or dictionary, found list (at offset 0)
"""

from collections.abc import Mapping
from typing import TypeVar

from bencodec.consts import TOKEN_DICTIONARY, TOKEN_END
from bencodec.encoding.byte_string import decode_owned_byte_string, encode_byte_string
from bencodec.encoding.token import Token, expect_token, peek_token
from bencodec.exceptions import InvalidVariantEncodingError
from bencodec.serialization import Deserializer, Serializer

from . import Decoder, Encoder

T = TypeVar('T')


def encode_unit_variant(serializer: Serializer, name: bytes) -> None:
    encode_byte_string(serializer, name)


def encode_variant(serializer: Serializer, name: bytes, payload: T, encoder: Encoder[T]) -> None:
    with serializer.nested():
        serializer.write_byte(TOKEN_DICTIONARY)
        encode_byte_string(serializer, name)
        encoder(serializer, payload)
        serializer.write_byte(TOKEN_END)


def decode_variant(
    deserializer: Deserializer,
    unit_variants: Mapping[bytes, T],
    payload_decoders: Mapping[bytes, Decoder[T]],
) -> T:
    """ Decode either a unit-like variant or a single-entry dictionary.

    A name that is present in neither mapping is an `InvalidVariantEncodingError`, and so is using the wrong form for a
    known name.
    """
    start = deserializer.cur_pos()
    token = peek_token(deserializer)

    if token is Token.BYTE_STRING:
        name = decode_owned_byte_string(deserializer)
        if name in unit_variants:
            return unit_variants[name]
        if name in payload_decoders:
            raise InvalidVariantEncodingError(f'variant {name!r} requires a payload', offset=start)
        raise InvalidVariantEncodingError(f'unknown variant {name!r}', offset=start)

    if token is not Token.DICTIONARY:
        raise InvalidVariantEncodingError(f'expected byte string or dictionary, found {token.value}', offset=start)

    with deserializer.nested():
        deserializer.read_byte()
        if deserializer.peek_byte() == TOKEN_END:
            raise InvalidVariantEncodingError('empty dictionary is not a variant', offset=start)
        pos = deserializer.cur_pos()
        expect_token(deserializer, Token.BYTE_STRING)
        name = decode_owned_byte_string(deserializer)
        decoder = payload_decoders.get(name)
        if decoder is None:
            if name in unit_variants:
                raise InvalidVariantEncodingError(f'unit variant {name!r} has no payload', offset=pos)
            raise InvalidVariantEncodingError(f'unknown variant {name!r}', offset=pos)
        value = decoder(deserializer)
        if deserializer.peek_byte() != TOKEN_END:
            pos = deserializer.cur_pos()
            raise InvalidVariantEncodingError('variant dictionary has more than one entry', offset=pos)
        deserializer.read_byte()
    return value
