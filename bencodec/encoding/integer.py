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
This module implements the integer token: `i`, an optional `-`, decimal digits and `e`.

The range is parametrized, by default it's the signed 64-bit range. Values outside of the range are rejected in both
directions, never clamped nor wrapped.

>>> se = Serializer.build_bytes_serializer()
>>> encode_integer(se, 42)
>>> encode_integer(se, -13)
>>> encode_integer(se, 0)
>>> bytes(se.finalize())
b'i42ei-13ei0e'

>>> de = Deserializer.build_bytes_deserializer(b'i42ei-13ei0e')
>>> decode_integer(de)
42
>>> decode_integer(de)
-13
>>> decode_integer(de)
0
>>> de.finalize()

Leading zeros and negative zero are not canonical, so they are invalid:

>>> for data in [b'i04e', b'i-0e', b'i-e', b'ie', b'i1x']:
...     try:
...         decode_integer(Deserializer.build_bytes_deserializer(data))
...     except InvalidIntegerError as e:
...         print(e)
leading zero in integer (at offset 2)
negative zero (at offset 0)
integer without digits (at offset 0)
integer without digits (at offset 0)
unexpected b'x' in integer (at offset 2)

Ranges are checked when decoding and when encoding:

>>> decode_integer(Deserializer.build_bytes_deserializer(b'i9223372036854775807e'))
9223372036854775807
>>> try:
...     decode_integer(Deserializer.build_bytes_deserializer(b'i9223372036854775808e'))
... except IntegerOverflowError as e:
...     print(e)
9223372036854775808 is out of range [-9223372036854775808, 9223372036854775807] (at offset 0)

>>> decode_integer(Deserializer.build_bytes_deserializer(b'i255e'), min_value=0, max_value=255)
255
>>> se = Serializer.build_bytes_serializer()
>>> try:
...     encode_integer(se, 256, min_value=0, max_value=255)
... except IntegerOverflowError as e:
...     print(e)
256 is out of range [0, 255]

A truncated integer is an EOF:

>>> try:
...     decode_integer(Deserializer.build_bytes_deserializer(b'i12'))
... except EofError as e:
...     print(e)
not enough bytes to read (at offset 3)
"""

from bencodec.consts import DIGIT_ZERO, INT64_MAX, INT64_MIN, MAX_INTEGER_DIGITS, TOKEN_END, TOKEN_INTEGER, TOKEN_MINUS
from bencodec.encoding.token import is_digit
from bencodec.exceptions import EofError, IntegerOverflowError, InvalidIntegerError, UnexpectedTokenError  # noqa: F401
from bencodec.serialization import Deserializer, Serializer


def _check_range(value: int, min_value: int, max_value: int, *, offset: int | None = None) -> None:
    if not (min_value <= value <= max_value):
        raise IntegerOverflowError(f'{value} is out of range [{min_value}, {max_value}]', offset=offset)


def encode_integer(
    serializer: Serializer,
    value: int,
    *,
    min_value: int = INT64_MIN,
    max_value: int = INT64_MAX,
) -> None:
    """ Encode an int as `i<digits>e`.

    This modules's docstring has more details and examples.
    """
    # XXX: normalize bool and other int subclasses to a plain int
    number = int(value)
    _check_range(number, min_value, max_value)
    serializer.write_bytes(b'i%de' % number)


def decode_integer(deserializer: Deserializer, *, min_value: int = INT64_MIN, max_value: int = INT64_MAX) -> int:
    """ Decode an `i<digits>e` token into an int within the given range.

    This modules's docstring has more details and examples.
    """
    start = deserializer.cur_pos()
    token = deserializer.read_byte()
    if token != TOKEN_INTEGER:
        raise UnexpectedTokenError(f'expected integer, found {bytes([token])!r}', offset=start)

    negative = False
    if deserializer.peek_byte() == TOKEN_MINUS:
        deserializer.read_byte()
        negative = True

    digits = bytearray()
    while True:
        pos = deserializer.cur_pos()
        byte = deserializer.read_byte()
        if byte == TOKEN_END:
            break
        if not is_digit(byte):
            raise InvalidIntegerError(f'unexpected {bytes([byte])!r} in integer', offset=pos)
        if len(digits) == 1 and digits[0] == DIGIT_ZERO:
            raise InvalidIntegerError('leading zero in integer', offset=pos)
        if len(digits) == MAX_INTEGER_DIGITS:
            # no supported range needs more digits, don't keep buffering them
            raise IntegerOverflowError('integer has too many digits', offset=start)
        digits.append(byte)

    if not digits:
        raise InvalidIntegerError('integer without digits', offset=start)
    if negative and digits == b'0':
        raise InvalidIntegerError('negative zero', offset=start)

    value = int(digits)
    if negative:
        value = -value
    _check_range(value, min_value, max_value, offset=start)
    return value
