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
Every Bencode value starts with a byte that tells its kind, this module implements the dispatch on that byte.

- an ASCII digit starts a byte string (the digit is part of the length)
- `i` starts an integer
- `l` starts a list
- `d` starts a dictionary
- `e` ends a list, dictionary or integer

>>> peek_token(Deserializer.build_bytes_deserializer(b'4:spam'))
<Token.BYTE_STRING: 'byte string'>
>>> peek_token(Deserializer.build_bytes_deserializer(b'i42e'))
<Token.INTEGER: 'integer'>
>>> peek_token(Deserializer.build_bytes_deserializer(b'le'))
<Token.LIST: 'list'>
>>> peek_token(Deserializer.build_bytes_deserializer(b'de'))
<Token.DICTIONARY: 'dictionary'>
>>> peek_token(Deserializer.build_bytes_deserializer(b'e'))
<Token.END: 'end'>

Peeking does not consume anything:

>>> de = Deserializer.build_bytes_deserializer(b'i1e')
>>> _ = peek_token(de)
>>> de.cur_pos()
0

>>> try:
...     peek_token(Deserializer.build_bytes_deserializer(b'x'))
... except UnexpectedTokenError as e:
...     print(e)
unexpected b'x' (at offset 0)

>>> try:
...     peek_token(Deserializer.build_bytes_deserializer(b''))
... except EofError as e:
...     print(e)
not enough bytes to read (at offset 0)
"""

from enum import Enum

from bencodec.consts import DIGIT_NINE, DIGIT_ZERO, TOKEN_DICTIONARY, TOKEN_END, TOKEN_INTEGER, TOKEN_LIST
from bencodec.exceptions import EofError, UnexpectedTokenError  # noqa: F401
from bencodec.serialization import Deserializer


class Token(Enum):
    BYTE_STRING = 'byte string'
    INTEGER = 'integer'
    LIST = 'list'
    DICTIONARY = 'dictionary'
    END = 'end'


_TOKEN_MAP: dict[int, Token] = {
    TOKEN_INTEGER: Token.INTEGER,
    TOKEN_LIST: Token.LIST,
    TOKEN_DICTIONARY: Token.DICTIONARY,
    TOKEN_END: Token.END,
}


def is_digit(byte: int) -> bool:
    return DIGIT_ZERO <= byte <= DIGIT_NINE


def peek_token(deserializer: Deserializer) -> Token:
    """ Identify the next token without consuming it.

    Raises `EofError` when there is nothing left and `UnexpectedTokenError` for bytes that can't start a value.
    """
    byte = deserializer.peek_byte()
    if is_digit(byte):
        return Token.BYTE_STRING
    token = _TOKEN_MAP.get(byte)
    if token is None:
        raise UnexpectedTokenError(f'unexpected {bytes([byte])!r}', offset=deserializer.cur_pos())
    return token


def expect_token(deserializer: Deserializer, expected: Token) -> None:
    """ Peek the next token and raise `UnexpectedTokenError` if it isn't `expected`.

    This is what typed decoders use to reject, for example, a list where an integer is expected.
    """
    pos = deserializer.cur_pos()
    token = peek_token(deserializer)
    if token is not expected:
        raise UnexpectedTokenError(f'expected {expected.value}, found {token.value}', offset=pos)
