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
Top-level entry points, each call is configured by a `BencodeSettings` (the defaults when not given).

>>> encode({'spam': ['a', 1]})
b'd4:spaml1:ai1eee'
>>> decode(b'd4:spaml1:ai1eee')
Dictionary({b'spam': List([ByteString(b'a'), Integer(1)])})

The whole input must be consumed unless trailing data is allowed:

>>> try:
...     decode(b'i1ei2e')
... except TrailingDataError as e:
...     print(e)
trailing data (at offset 3)
>>> decode(b'i1ei2e', allow_trailing=True)
Integer(1)

Typed entry points go through a `BType`, either given directly or built from a type annotation:

>>> encode_typed(dict[str, int], {'b': 2, 'a': 1})
b'd1:ai1e1:bi2ee'
>>> decode_typed(list[str], b'l4:spam4:eggse')
['spam', 'eggs']
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, BinaryIO, Optional, TypeVar

from structlog import get_logger

from bencodec.btypes import BType, make_btype
from bencodec.compound_encoding.value import decode_value, encode_value
from bencodec.conf import DEFAULT_SETTINGS, BencodeSettings
from bencodec.exceptions import BencodeError, TrailingDataError, UnsupportedTypeError  # noqa: F401
from bencodec.serialization import Buffer, Deserializer, Serializer
from bencodec.value import Value

logger = get_logger()

T = TypeVar('T')


@contextmanager
def _logged(operation: str) -> Iterator[None]:
    """ Log failed operations at debug level, the error is always re-raised."""
    log = logger.new(operation=operation)
    try:
        yield
    except BencodeError as e:
        log.debug('bencode operation failed', kind=e.kind.value, offset=e.offset, error=e.message)
        raise


def _get_btype(type_: Any) -> BType:
    if isinstance(type_, BType):
        return type_
    return make_btype(type_)


def _bytes_deserializer(data: Buffer, settings: BencodeSettings) -> Deserializer:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise UnsupportedTypeError(f'expected a bytes-like object, got {type(data).__name__}')
    deserializer = Deserializer.build_bytes_deserializer(
        data,
        max_depth=settings.MAX_DEPTH,
        max_byte_string_length=settings.MAX_BYTE_STRING_LENGTH,
    )
    return deserializer.with_optional_max_bytes(settings.MAX_INPUT_BYTES)


def _stream_deserializer(reader: BinaryIO, settings: BencodeSettings) -> Deserializer:
    deserializer = Deserializer.build_stream_deserializer(
        reader,
        max_depth=settings.MAX_DEPTH,
        max_byte_string_length=settings.MAX_BYTE_STRING_LENGTH,
    )
    return deserializer.with_optional_max_bytes(settings.MAX_INPUT_BYTES)


def encode(value: Any, *, settings: Optional[BencodeSettings] = None) -> bytes:
    """ Encode a `Value`, or native objects convertible with `Value.from_python`.

    Nothing is returned when encoding fails, the output is staged in memory.
    """
    settings = DEFAULT_SETTINGS if settings is None else settings
    with _logged('encode'):
        serializer = Serializer.build_bytes_serializer(max_depth=settings.MAX_DEPTH)
        encode_value(serializer, Value.from_python(value, max_depth=settings.MAX_DEPTH))
        return bytes(serializer.finalize())


def encode_to(writer: BinaryIO, value: Any, *, settings: Optional[BencodeSettings] = None) -> int:
    """ Encode straight into a writable binary file, returns the number of bytes written.

    When encoding fails the writer may have received part of the output.
    """
    settings = DEFAULT_SETTINGS if settings is None else settings
    settings.require_streams()
    with _logged('encode_to'):
        serializer = Serializer.build_stream_serializer(writer, max_depth=settings.MAX_DEPTH)
        encode_value(serializer, Value.from_python(value, max_depth=settings.MAX_DEPTH))
        return serializer.cur_pos()


def encode_typed(type_: Any, value: Any, *, settings: Optional[BencodeSettings] = None) -> bytes:
    """ Encode a value described by a type annotation (or a `BType`)."""
    settings = DEFAULT_SETTINGS if settings is None else settings
    with _logged('encode_typed'):
        btype = _get_btype(type_)
        serializer = Serializer.build_bytes_serializer(max_depth=settings.MAX_DEPTH)
        btype.serialize(serializer, value)
        return bytes(serializer.finalize())


def encode_typed_to(writer: BinaryIO, type_: Any, value: Any, *, settings: Optional[BencodeSettings] = None) -> int:
    settings = DEFAULT_SETTINGS if settings is None else settings
    settings.require_streams()
    with _logged('encode_typed_to'):
        btype = _get_btype(type_)
        serializer = Serializer.build_stream_serializer(writer, max_depth=settings.MAX_DEPTH)
        btype.serialize(serializer, value)
        return serializer.cur_pos()


def decode(
    data: Buffer,
    *,
    borrow: Optional[bool] = None,
    allow_trailing: Optional[bool] = None,
    settings: Optional[BencodeSettings] = None,
) -> Value:
    """ Decode one value from a bytes-like object.

    With `borrow=True` byte strings are returned as `BorrowedByteString`, views into `data` that are only valid while
    `data` is alive and unchanged.
    """
    settings = DEFAULT_SETTINGS if settings is None else settings
    borrow = settings.effective_borrow(borrow)
    allow_trailing = settings.effective_allow_trailing(allow_trailing)
    with _logged('decode'):
        deserializer = _bytes_deserializer(data, settings)
        value = decode_value(deserializer, borrow=borrow)
        if not allow_trailing:
            deserializer.finalize()
        return value


def decode_from(
    reader: BinaryIO,
    *,
    allow_trailing: Optional[bool] = None,
    settings: Optional[BencodeSettings] = None,
) -> Value:
    """ Decode one value from a readable binary file, byte strings are always owned.

    When trailing data is allowed nothing past the end of the value is consumed from the reader.
    """
    settings = DEFAULT_SETTINGS if settings is None else settings
    settings.require_streams()
    allow_trailing = settings.effective_allow_trailing(allow_trailing)
    with _logged('decode_from'):
        deserializer = _stream_deserializer(reader, settings)
        value = decode_value(deserializer)
        if not allow_trailing:
            deserializer.finalize()
        return value


def decode_typed(
    type_: Any,
    data: Buffer,
    *,
    allow_trailing: Optional[bool] = None,
    settings: Optional[BencodeSettings] = None,
) -> Any:
    """ Decode one value described by a type annotation (or a `BType`), the result owns all of its data."""
    settings = DEFAULT_SETTINGS if settings is None else settings
    settings.require_owned()
    allow_trailing = settings.effective_allow_trailing(allow_trailing)
    with _logged('decode_typed'):
        btype = _get_btype(type_)
        deserializer = _bytes_deserializer(data, settings)
        value = btype.deserialize(deserializer)
        if not allow_trailing:
            deserializer.finalize()
        return value


def decode_typed_from(
    type_: Any,
    reader: BinaryIO,
    *,
    allow_trailing: Optional[bool] = None,
    settings: Optional[BencodeSettings] = None,
) -> Any:
    settings = DEFAULT_SETTINGS if settings is None else settings
    settings.require_streams()
    allow_trailing = settings.effective_allow_trailing(allow_trailing)
    with _logged('decode_typed_from'):
        btype = _get_btype(type_)
        deserializer = _stream_deserializer(reader, settings)
        value = btype.deserialize(deserializer)
        if not allow_trailing:
            deserializer.finalize()
        return value
