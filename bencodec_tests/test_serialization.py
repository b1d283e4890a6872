import io

import pytest

from bencodec.encoding.byte_string import decode_byte_string, encode_byte_string
from bencodec.encoding.integer import decode_integer
from bencodec.exceptions import (
    DepthLimitExceededError,
    EofError,
    IoError,
    MaxBytesExceededError,
    TrailingDataError,
    UnexpectedTokenError,
)
from bencodec.serialization import Deserializer, Serializer


def test_bytes_serializer() -> None:
    serializer = Serializer.build_bytes_serializer()
    serializer.write_byte(ord('i'))
    serializer.write_bytes(b'42')
    serializer.write_bytes(memoryview(b'xe')[1:])
    assert serializer.cur_pos() == 4
    assert bytes(serializer.finalize()) == b'i42e'


def test_serializer_depth() -> None:
    serializer = Serializer.build_bytes_serializer(max_depth=1)
    with serializer.nested():
        with pytest.raises(DepthLimitExceededError):
            with serializer.nested():
                pass
    # the depth is restored after leaving
    with serializer.nested():
        pass


def test_optional_max_bytes() -> None:
    deserializer = Deserializer.build_bytes_deserializer(b'')
    assert deserializer.with_optional_max_bytes(None) is deserializer


def test_bytes_deserializer() -> None:
    deserializer = Deserializer.build_bytes_deserializer(b'abcdef')
    assert deserializer.borrows
    assert deserializer.peek_byte() == ord('a')
    assert deserializer.read_byte() == ord('a')
    view = deserializer.read_bytes(2)
    assert isinstance(view, memoryview)
    assert bytes(view) == b'bc'
    assert deserializer.cur_pos() == 3
    with pytest.raises(TrailingDataError):
        deserializer.finalize()
    assert bytes(deserializer.read_bytes(3)) == b'def'
    assert deserializer.is_empty()
    deserializer.finalize()
    with pytest.raises(EofError):
        deserializer.read_byte()


def test_expect_byte() -> None:
    deserializer = Deserializer.build_bytes_deserializer(b'ab')
    deserializer.expect_byte(ord('a'))
    with pytest.raises(UnexpectedTokenError):
        deserializer.expect_byte(ord('a'))


def test_stream_deserializer() -> None:
    reader = io.BytesIO(b'i42e5:hello')
    deserializer = Deserializer.build_stream_deserializer(reader)
    assert not deserializer.borrows
    assert decode_integer(deserializer) == 42
    data = decode_byte_string(deserializer)
    assert isinstance(data, bytes)
    assert data == b'hello'
    assert deserializer.cur_pos() == 11
    deserializer.finalize()


def test_stream_deserializer_big_read() -> None:
    payload = bytes(range(256)) * 1024
    writer = io.BytesIO()
    encode_byte_string(Serializer.build_stream_serializer(writer), payload)
    deserializer = Deserializer.build_stream_deserializer(io.BytesIO(writer.getvalue()))
    assert decode_byte_string(deserializer) == payload
    deserializer.finalize()


def test_stream_deserializer_truncated() -> None:
    deserializer = Deserializer.build_stream_deserializer(io.BytesIO(b'10:hello'))
    with pytest.raises(EofError) as exc_info:
        decode_byte_string(deserializer)
    assert exc_info.value.offset == 8


def test_stream_deserializer_peek_is_not_consumed() -> None:
    reader = io.BytesIO(b'ab')
    deserializer = Deserializer.build_stream_deserializer(reader)
    assert deserializer.peek_byte() == ord('a')
    assert deserializer.cur_pos() == 0
    assert deserializer.read_bytes(2) == b'ab'
    assert deserializer.is_empty()


class _NonBlockingReader(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> None:  # type: ignore[override]
        return None


def test_stream_deserializer_would_block() -> None:
    deserializer = Deserializer.build_stream_deserializer(_NonBlockingReader())  # type: ignore[arg-type]
    with pytest.raises(IoError):
        deserializer.peek_byte()


def test_stream_serializer() -> None:
    writer = io.BytesIO()
    serializer = Serializer.build_stream_serializer(writer)
    serializer.write_byte(ord('l'))
    serializer.write_bytes(b'e')
    assert serializer.cur_pos() == 2
    assert writer.getvalue() == b'le'


def test_max_bytes_deserializer() -> None:
    deserializer = Deserializer.build_bytes_deserializer(b'i1ei2e').with_max_bytes(4)
    assert decode_integer(deserializer) == 1
    assert deserializer.peek_byte() == ord('i')
    with pytest.raises(MaxBytesExceededError):
        decode_integer(deserializer)


def test_adapter_keeps_limits() -> None:
    deserializer = Deserializer.build_bytes_deserializer(b'le', max_depth=3, max_byte_string_length=5)
    adapted = deserializer.with_max_bytes(10)
    assert adapted.max_depth == 3
    assert adapted.max_byte_string_length == 5
    assert adapted.borrows
