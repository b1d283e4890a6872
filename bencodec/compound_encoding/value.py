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
Self-describing encoding: any `Value` can be written and any well-formed document can be read back as a `Value`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_value(se, Value.from_python({'spam': ['a', 1]}))
>>> bytes(se.finalize())
b'd4:spaml1:ai1eee'

>>> de = Deserializer.build_bytes_deserializer(b'd4:spaml1:ai1eee')
>>> decode_value(de)
Dictionary({b'spam': List([ByteString(b'a'), Integer(1)])})
>>> de.finalize()

In borrow mode the byte strings are views into the source, keys are always copied:

>>> data = b'd3:keyl5:valueee'
>>> value = decode_value(Deserializer.build_bytes_deserializer(data), borrow=True)
>>> item = value[b'key'][0]
>>> type(item).__name__
'BorrowedByteString'
>>> item.data.obj is data
True

An `e` can't start a value:

>>> try:
...     decode_value(Deserializer.build_bytes_deserializer(b'e'))
... except UnexpectedTokenError as e:
...     print(e)
unexpected end (at offset 0)
"""

from functools import partial

from bencodec.encoding.byte_string import decode_byte_string, encode_byte_string
from bencodec.encoding.integer import decode_integer, encode_integer
from bencodec.encoding.token import Token, peek_token
from bencodec.exceptions import UnexpectedTokenError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer
from bencodec.value import BorrowedByteString, ByteString, Dictionary, Integer, List, Value

from .dictionary import decode_dictionary, encode_dictionary
from .list import decode_list, encode_list


def encode_value(serializer: Serializer, value: Value) -> None:
    if isinstance(value, ByteString):
        encode_byte_string(serializer, value.data)
    elif isinstance(value, Integer):
        encode_integer(serializer, value.value)
    elif isinstance(value, List):
        encode_list(serializer, value, encode_value)
    elif isinstance(value, Dictionary):
        encode_dictionary(serializer, value.items(), encode_value)
    else:
        raise UnsupportedTypeError(f'expected a Value, got {type(value).__name__}')


def decode_value(deserializer: Deserializer, *, borrow: bool = False) -> Value:
    """ Decode the next value, whatever its type.

    When `borrow=True` and the deserializer supports it, byte strings are returned as `BorrowedByteString`.
    """
    pos = deserializer.cur_pos()
    token = peek_token(deserializer)
    if token is Token.BYTE_STRING:
        data = decode_byte_string(deserializer)
        if borrow and isinstance(data, memoryview):
            return BorrowedByteString(data)
        return ByteString(data)
    elif token is Token.INTEGER:
        return Integer(decode_integer(deserializer))
    elif token is Token.LIST:
        decoder = partial(decode_value, borrow=borrow)
        return List._from_values(decode_list(deserializer, decoder, list))
    elif token is Token.DICTIONARY:
        decoder = partial(decode_value, borrow=borrow)
        return Dictionary._from_sorted(decode_dictionary(
            deserializer,
            lambda _key, de: decoder(de),
            list,
        ))
    else:
        raise UnexpectedTokenError(f'unexpected {token.value}', offset=pos)
