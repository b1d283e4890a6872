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

from enum import Enum, unique
from typing import ClassVar, Optional


@unique
class ErrorKind(Enum):
    IO = 'io'
    EOF = 'eof'
    INVALID_BYTE_STRING_LENGTH = 'invalid_byte_string_length'
    INVALID_INTEGER = 'invalid_integer'
    INTEGER_OVERFLOW = 'integer_overflow'
    INVALID_DICTIONARY_KEY_ORDER = 'invalid_dictionary_key_order'
    DUPLICATE_KEY = 'duplicate_key'
    UNEXPECTED_TOKEN = 'unexpected_token'
    UNSUPPORTED_TYPE = 'unsupported_type'
    UNSUPPORTED_SHAPE = 'unsupported_shape'
    INVALID_VARIANT_ENCODING = 'invalid_variant_encoding'
    TRAILING_DATA = 'trailing_data'
    INVALID_UTF8 = 'invalid_utf8'
    MISSING_FIELD = 'missing_field'
    DEPTH_LIMIT_EXCEEDED = 'depth_limit_exceeded'
    MAX_BYTES_EXCEEDED = 'max_bytes_exceeded'


class BencodeError(Exception):
    """ Base class for every error raised while encoding or decoding.

    The `offset` is the position (in bytes, from the start of the input) where the problem was detected, it is only
    known for decode errors, for encode errors it is `None`.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str = '', *, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        message = self.message or self.kind.value.replace('_', ' ')
        if self.offset is None:
            return message
        return f'{message} (at offset {self.offset})'

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.message!r}, offset={self.offset!r})'


class IoError(BencodeError):
    """ The underlying byte source or sink failed, the `OSError` is chained as `__cause__`."""
    kind = ErrorKind.IO


class EofError(BencodeError):
    """ The input ended before a complete value could be read."""
    kind = ErrorKind.EOF


class InvalidByteStringLengthError(BencodeError):
    kind = ErrorKind.INVALID_BYTE_STRING_LENGTH


class InvalidIntegerError(BencodeError):
    """ Malformed digits, leading zero or negative zero."""
    kind = ErrorKind.INVALID_INTEGER


class IntegerOverflowError(BencodeError):
    kind = ErrorKind.INTEGER_OVERFLOW


class InvalidDictionaryKeyOrderError(BencodeError):
    kind = ErrorKind.INVALID_DICTIONARY_KEY_ORDER


class DuplicateKeyError(BencodeError):
    kind = ErrorKind.DUPLICATE_KEY


class UnexpectedTokenError(BencodeError):
    kind = ErrorKind.UNEXPECTED_TOKEN


class UnsupportedTypeError(BencodeError, TypeError):
    """ The value (or type annotation) has no Bencode representation, floats for example."""
    kind = ErrorKind.UNSUPPORTED_TYPE


class UnsupportedShapeError(BencodeError):
    """ The value has a representation only in some positions, like `None` outside of a dictionary entry."""
    kind = ErrorKind.UNSUPPORTED_SHAPE


class InvalidVariantEncodingError(BencodeError):
    kind = ErrorKind.INVALID_VARIANT_ENCODING


class TrailingDataError(BencodeError):
    kind = ErrorKind.TRAILING_DATA


class InvalidUtf8Error(BencodeError):
    kind = ErrorKind.INVALID_UTF8


class MissingFieldError(BencodeError):
    kind = ErrorKind.MISSING_FIELD


class DepthLimitExceededError(BencodeError):
    kind = ErrorKind.DEPTH_LIMIT_EXCEEDED


class MaxBytesExceededError(BencodeError):
    """ This error is raised when an adapted serializer reached its maximum bytes write/read.

    After this exception is raised the adapted serializer cannot be used anymore. Handlers of this exception are
    expected to either: bubble up the exception (or an equivalent exception), or return an error. Handlers should not
    try to write again on the same serializer.
    """
    kind = ErrorKind.MAX_BYTES_EXCEEDED


class ProfileError(Exception):
    """ The operation isn't available in the configured `Profile`, for example owned output in `Profile.MINIMAL`.

    This is a usage error, not a codec error, so it isn't a `BencodeError` and it has no offset.
    """
