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
This module implements utf-8 text as a Bencode byte string.

It works exactly like byte string encoding but the payload is utf-8 and it takes/returns a `str`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'foobar')
>>> encode_utf8(se, 'π')
>>> encode_utf8(se, '😎')
>>> bytes(se.finalize())
b'6:foobar2:\xcf\x804:\xf0\x9f\x98\x8e'

>>> de = Deserializer.build_bytes_deserializer(b'6:foobar2:\xcf\x804:\xf0\x9f\x98\x8e')
>>> decode_utf8(de)
'foobar'
>>> decode_utf8(de)
'π'
>>> decode_utf8(de)
'😎'
>>> de.finalize()

The offset of an invalid payload points at the byte string, not at the bad byte:

>>> try:
...     decode_utf8(Deserializer.build_bytes_deserializer(b'2:\xff\xfe'))
... except InvalidUtf8Error as e:
...     print(e)
invalid utf-8 in byte string (at offset 0)

Text that has no UTF-8 form, like a lone surrogate, can't be encoded:

>>> try:
...     utf8_bytes('\ud800')
... except InvalidUtf8Error as e:
...     print(e)
text is not encodable as utf-8
"""

from typing import Optional

from bencodec.exceptions import InvalidUtf8Error
from bencodec.serialization import Deserializer, Serializer

from .byte_string import decode_byte_string, encode_byte_string


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    encode_byte_string(serializer, utf8_bytes(value))


def utf8_bytes(value: str) -> bytes:
    """ Encode text as UTF-8, raising `InvalidUtf8Error` instead of `UnicodeEncodeError`."""
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidUtf8Error('text is not encodable as utf-8') from e


def decode_utf8(deserializer: Deserializer, *, max_length: Optional[int] = None) -> str:
    """ Decodes a UTF-8 string with a length prefix.

    This modules's docstring has more details and examples.
    """
    pos = deserializer.cur_pos()
    data = decode_byte_string(deserializer, max_length=max_length)
    try:
        return str(data, 'utf-8')
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error('invalid utf-8 in byte string', offset=pos) from e
