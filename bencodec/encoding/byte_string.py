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
This modules implements encoding of byte sequences by prefixing them with their length in decimal and a colon.

>>> se = Serializer.build_bytes_serializer()
>>> encode_byte_string(se, b'spam')
>>> encode_byte_string(se, b'')
>>> encode_byte_string(se, b'\x00\xff')
>>> bytes(se.finalize())
b'4:spam0:2:\x00\xff'

When the deserializer is backed by a buffer the result is a read-only view into that buffer (nothing is copied),
`decode_owned_byte_string` always returns `bytes`:

>>> data = b'4:spam0:'
>>> de = Deserializer.build_bytes_deserializer(data)
>>> view = decode_byte_string(de)
>>> type(view).__name__, bytes(view)
('memoryview', b'spam')
>>> view.obj is data
True
>>> decode_owned_byte_string(de)
b''
>>> de.finalize()

The length has no leading zeros (except for the length `0` itself) and must be followed by a colon:

>>> for data in [b'04:spam', b'4spam', b'4-spam']:
...     try:
...         decode_byte_string(Deserializer.build_bytes_deserializer(data))
...     except InvalidByteStringLengthError as e:
...         print(e)
leading zero in byte string length (at offset 1)
unexpected b's' in byte string length (at offset 1)
unexpected b'-' in byte string length (at offset 1)

The declared length must be fully available:

>>> try:
...     decode_byte_string(Deserializer.build_bytes_deserializer(b'3:ab'))
... except EofError as e:
...     print(e)
expected 3 bytes, only 2 left (at offset 2)

A maximum length can be imposed before anything is read:

>>> try:
...     decode_byte_string(Deserializer.build_bytes_deserializer(b'5:hello'), max_length=4)
... except InvalidByteStringLengthError as e:
...     print(e)
length 5 exceeds the maximum of 4 (at offset 0)
"""

from typing import Optional

from bencodec.consts import DIGIT_ZERO, MAX_LENGTH_DIGITS, TOKEN_COLON
from bencodec.encoding.token import is_digit
from bencodec.exceptions import EofError, InvalidByteStringLengthError, UnexpectedTokenError  # noqa: F401
from bencodec.serialization import Buffer, Deserializer, Serializer


def encode_byte_string(serializer: Serializer, data: Buffer) -> None:
    """ Encodes a byte-sequence adding a length prefix.

    This modules's docstring has more details and examples.
    """
    view = memoryview(data).cast('B')
    serializer.write_bytes(b'%d:' % view.nbytes)
    serializer.write_bytes(view)


def decode_byte_string_length(deserializer: Deserializer, *, max_length: Optional[int] = None) -> int:
    """ Decodes the `<length>:` prefix of a byte string.

    When `max_length` is not given the deserializer's `max_byte_string_length` is used.
    """
    if max_length is None:
        max_length = deserializer.max_byte_string_length
    start = deserializer.cur_pos()
    first = deserializer.peek_byte()
    if not is_digit(first):
        raise UnexpectedTokenError(f'expected byte string, found {bytes([first])!r}', offset=start)

    digits = bytearray()
    while True:
        pos = deserializer.cur_pos()
        byte = deserializer.read_byte()
        if byte == TOKEN_COLON:
            break
        if not is_digit(byte):
            raise InvalidByteStringLengthError(f'unexpected {bytes([byte])!r} in byte string length', offset=pos)
        if len(digits) == 1 and digits[0] == DIGIT_ZERO:
            raise InvalidByteStringLengthError('leading zero in byte string length', offset=pos)
        if len(digits) == MAX_LENGTH_DIGITS:
            raise InvalidByteStringLengthError('byte string length has too many digits', offset=start)
        digits.append(byte)

    length = int(digits)
    if max_length is not None and length > max_length:
        raise InvalidByteStringLengthError(f'length {length} exceeds the maximum of {max_length}', offset=start)
    return length


def decode_byte_string(deserializer: Deserializer, *, max_length: Optional[int] = None) -> Buffer:
    """ Decodes a byte-sequence with a length prefix.

    The result is a view into the source when the deserializer supports it, use `decode_owned_byte_string` to always
    get `bytes`.
    """
    length = decode_byte_string_length(deserializer, max_length=max_length)
    return deserializer.read_bytes(length)


def decode_owned_byte_string(deserializer: Deserializer, *, max_length: Optional[int] = None) -> bytes:
    """ Like `decode_byte_string` but the result never references the source.
    """
    return bytes(decode_byte_string(deserializer, max_length=max_length))
