import io

import pytest

from bencodec import (
    BencodeError,
    ByteString,
    Dictionary,
    ErrorKind,
    Integer,
    List,
    decode,
    decode_from,
    encode,
    encode_to,
    encode_typed,
)
from bencodec.consts import INT64_MAX, INT64_MIN
from bencodec.exceptions import (
    DuplicateKeyError,
    EofError,
    IntegerOverflowError,
    InvalidByteStringLengthError,
    InvalidDictionaryKeyOrderError,
    InvalidIntegerError,
    InvalidUtf8Error,
    IoError,
    MaxBytesExceededError,
    TrailingDataError,
    UnexpectedTokenError,
    UnsupportedShapeError,
    UnsupportedTypeError,
)
from bencodec_tests import unittest


def test_decode_byte_string() -> None:
    assert decode(b'4:spam') == ByteString(b'spam')


def test_decode_integers() -> None:
    assert decode(b'i42e') == Integer(42)
    assert decode(b'i-13e') == Integer(-13)
    assert decode(b'i0e') == Integer(0)


def test_decode_list() -> None:
    assert decode(b'l4:spam4:eggse') == List([ByteString(b'spam'), ByteString(b'eggs')])


def test_decode_dictionary() -> None:
    value = decode(b'd3:cow3:moo4:spam4:eggse')
    assert value == Dictionary({b'cow': b'moo', b'spam': b'eggs'})
    assert list(value) == [b'cow', b'spam']


def test_decode_empty_containers() -> None:
    assert decode(b'le') == List()
    assert decode(b'de') == Dictionary()
    assert decode(b'0:') == ByteString(b'')


def test_decode_unsorted_dictionary() -> None:
    with pytest.raises(InvalidDictionaryKeyOrderError) as exc_info:
        decode(b'd4:spam4:eggs3:cow3:mooe')
    assert exc_info.value.kind is ErrorKind.INVALID_DICTIONARY_KEY_ORDER
    assert exc_info.value.offset == 13


def test_decode_duplicate_key() -> None:
    with pytest.raises(DuplicateKeyError):
        decode(b'd3:cowi1e3:cowi2ee')


@pytest.mark.parametrize('data', [b'i04e', b'i-0e', b'i-e', b'ie', b'i1-2e', b'i+1e'])
def test_decode_invalid_integer(data: bytes) -> None:
    with pytest.raises(InvalidIntegerError):
        decode(data)


@pytest.mark.parametrize('data', [b'3:ab', b'i12', b'l4:spam', b'd3:cow', b'', b'd3:cow3:moo'])
def test_decode_eof(data: bytes) -> None:
    with pytest.raises(EofError):
        decode(data)


def test_int64_boundaries() -> None:
    assert decode(b'i9223372036854775807e') == Integer(INT64_MAX)
    assert decode(b'i-9223372036854775808e') == Integer(INT64_MIN)
    with pytest.raises(IntegerOverflowError):
        decode(b'i9223372036854775808e')
    with pytest.raises(IntegerOverflowError):
        decode(b'i-9223372036854775809e')
    # absurdly long numbers are rejected without reading them all
    with pytest.raises(IntegerOverflowError):
        decode(b'i' + b'1' * 1000 + b'e')


def test_encode_int64_boundaries() -> None:
    assert encode(INT64_MAX) == b'i9223372036854775807e'
    assert encode(INT64_MIN) == b'i-9223372036854775808e'
    with pytest.raises(IntegerOverflowError):
        encode(INT64_MAX + 1)


@pytest.mark.parametrize('data', [b'04:spam', b'4spam', b'-1:a'])
def test_decode_invalid_length(data: bytes) -> None:
    with pytest.raises((InvalidByteStringLengthError, UnexpectedTokenError)):
        decode(data)


@pytest.mark.parametrize('data', [b'x', b'e', b'di1ei1ee', b'l4:spamee'])
def test_decode_unexpected_token(data: bytes) -> None:
    with pytest.raises((UnexpectedTokenError, TrailingDataError)):
        decode(data)


def test_encode_native_objects() -> None:
    assert encode(b'spam') == b'4:spam'
    assert encode('spam') == b'4:spam'
    assert encode(42) == b'i42e'
    assert encode(True) == b'i1e'
    assert encode([b'spam', b'eggs']) == b'l4:spam4:eggse'
    assert encode({'spam': b'eggs', 'cow': 'moo'}) == b'd3:cow3:moo4:spam4:eggse'


def test_encode_unsupported() -> None:
    with pytest.raises(UnsupportedTypeError):
        encode(1.5)
    with pytest.raises(UnsupportedTypeError):
        encode(object())
    with pytest.raises(UnsupportedShapeError):
        encode(None)
    with pytest.raises(UnsupportedShapeError):
        encode({'a': [None]})


def test_encode_omits_none_entries() -> None:
    assert encode({'a': None}) == b'de'
    assert encode({'a': None, 'b': {'c': None}}) == b'd1:bdee'


def test_encode_text_without_utf8_form() -> None:
    with pytest.raises(InvalidUtf8Error):
        encode('\ud800')
    with pytest.raises(InvalidUtf8Error):
        encode({'\ud800': 1})
    with pytest.raises(InvalidUtf8Error):
        encode_typed(str, '\ud800')
    with pytest.raises(InvalidUtf8Error):
        encode_typed(dict[str, int], {'\ud800': 1})


def test_encode_duplicate_keys_after_conversion() -> None:
    with pytest.raises(DuplicateKeyError):
        encode({'a': 1, b'a': 2})


def test_trailing_data() -> None:
    with pytest.raises(TrailingDataError) as exc_info:
        decode(b'i1ei2e')
    assert exc_info.value.offset == 3
    assert decode(b'i1ei2e', allow_trailing=True) == Integer(1)


def test_decode_rejects_non_buffers() -> None:
    with pytest.raises(UnsupportedTypeError):
        decode('i1e')  # type: ignore[arg-type]
    with pytest.raises(UnsupportedTypeError):
        decode(12)  # type: ignore[arg-type]
    with pytest.raises(UnsupportedTypeError):
        decode(None)  # type: ignore[arg-type]


def test_decode_accepts_buffers() -> None:
    assert decode(bytearray(b'i1e')) == Integer(1)
    assert decode(memoryview(b'xi1ex')[1:4]) == Integer(1)


def test_borrow_mode() -> None:
    data = b'l4:spame'
    borrowed = decode(data, borrow=True)
    item = borrowed[0]
    assert isinstance(item.data, memoryview)
    assert item.data.obj is data
    assert item.data.readonly
    owned = decode(data)
    assert isinstance(owned[0].data, bytes)
    assert borrowed == owned
    assert isinstance(borrowed.to_owned()[0].data, bytes)


def test_stream_round_trip() -> None:
    value = Dictionary({'spam': [1, 2, b'eggs'], 'cow': {'moo': -1}})
    writer = io.BytesIO()
    written = encode_to(writer, value)
    assert written == len(writer.getvalue())
    assert writer.getvalue() == encode(value)
    assert decode_from(io.BytesIO(writer.getvalue())) == value


def test_decode_from_leaves_trailing_data() -> None:
    reader = io.BytesIO(b'i1e4:spam')
    assert decode_from(reader, allow_trailing=True) == Integer(1)
    assert reader.read() == b'4:spam'


def test_decode_from_trailing_data() -> None:
    with pytest.raises(TrailingDataError):
        decode_from(io.BytesIO(b'i1e4:spam'))


def test_decode_from_eof() -> None:
    with pytest.raises(EofError):
        decode_from(io.BytesIO(b'l4:spam'))


class _BrokenReader(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray) -> int:  # type: ignore[override]
        raise OSError('device not ready')


class _BrokenWriter(io.RawIOBase):
    def writable(self) -> bool:
        return True

    def write(self, data: bytes) -> int:  # type: ignore[override]
        raise OSError('disk full')


def test_io_errors() -> None:
    with pytest.raises(IoError) as exc_info:
        decode_from(_BrokenReader())  # type: ignore[arg-type]
    assert isinstance(exc_info.value.__cause__, OSError)
    with pytest.raises(IoError) as exc_info:
        encode_to(_BrokenWriter(), [1, 2, 3])  # type: ignore[arg-type]
    assert isinstance(exc_info.value.__cause__, OSError)


class CodecTestCase(unittest.TestCase):
    def _random_value(self, depth: int = 0) -> object:
        kinds = ['bytes', 'int'] if depth >= 4 else ['bytes', 'int', 'list', 'dict']
        kind = self.rng.choice(kinds)
        if kind == 'bytes':
            return self.random_bytes(self.rng.randint(0, 8))
        if kind == 'int':
            return self.rng.randint(INT64_MIN, INT64_MAX)
        if kind == 'list':
            return [self._random_value(depth + 1) for _ in range(self.rng.randint(0, 4))]
        return {self.random_bytes(self.rng.randint(0, 4)): self._random_value(depth + 1)
                for _ in range(self.rng.randint(0, 4))}

    def test_round_trip(self) -> None:
        for _ in range(200):
            native = self._random_value()
            data = encode(native)
            value = decode(data)
            self.assertEqual(value.to_python(), native)
            # canonical idempotence
            self.assertEqual(encode(value), data)

    def test_fuzz(self) -> None:
        alphabet = b'0123456789ilde:-x'
        for _ in range(2000):
            size = self.rng.randint(0, 24)
            if self.rng.random() < 0.5:
                data = bytes(self.rng.choice(alphabet) for _ in range(size))
            else:
                data = self.random_bytes(size)
            try:
                value = decode(data)
            except BencodeError:
                continue
            # anything accepted is canonical
            self.assertEqual(encode(value), data)

    def test_fuzz_mutations(self) -> None:
        data = encode({'info': {'name': 'spam', 'length': 42, 'pieces': [b'\x00' * 4, b'\xff' * 4]}})
        for _ in range(1000):
            mutated = bytearray(data)
            for _ in range(self.rng.randint(1, 3)):
                mutated[self.rng.randrange(len(mutated))] = self.rng.randrange(256)
            try:
                decode(bytes(mutated))
            except BencodeError:
                pass

    def test_max_depth(self) -> None:
        settings = self.get_settings(MAX_DEPTH=3)
        self.assertEqual(decode(b'llleee', settings=settings), List([List([List()])]))
        with self.assertRaises(BencodeError) as cm:
            decode(b'lllleeee', settings=settings)
        self.assertIs(cm.exception.kind, ErrorKind.DEPTH_LIMIT_EXCEEDED)
        with self.assertRaises(BencodeError) as cm:
            encode([[[[]]]], settings=settings)
        self.assertIs(cm.exception.kind, ErrorKind.DEPTH_LIMIT_EXCEEDED)

    def test_default_max_depth(self) -> None:
        data = b'l' * 128 + b'e' * 128
        self.assertEqual(encode(decode(data)), data)
        with self.assertRaises(BencodeError):
            decode(b'l' * 129 + b'e' * 129)

    def test_max_byte_string_length(self) -> None:
        settings = self.get_settings(MAX_BYTE_STRING_LENGTH=4)
        self.assertEqual(decode(b'4:spam', settings=settings), ByteString(b'spam'))
        with self.assertRaises(InvalidByteStringLengthError):
            decode(b'5:spams', settings=settings)
        # also applies to keys
        with self.assertRaises(InvalidByteStringLengthError):
            decode(b'd5:spamsi1ee', settings=settings)

    def test_max_input_bytes(self) -> None:
        settings = self.get_settings(MAX_INPUT_BYTES=8)
        self.assertEqual(decode(b'l4:spame', settings=settings), List([b'spam']))
        with self.assertRaises(MaxBytesExceededError):
            decode(b'l4:spam4:eggse', settings=settings)
        with self.assertRaises(MaxBytesExceededError):
            decode_from(io.BytesIO(b'l4:spam4:eggse'), settings=settings)

    def test_settings_trailing_default(self) -> None:
        settings = self.get_settings(ALLOW_TRAILING_DATA=True)
        self.assertEqual(decode(b'i1ei2e', settings=settings), Integer(1))
        with self.assertRaises(TrailingDataError):
            decode(b'i1ei2e', allow_trailing=False, settings=settings)

    def test_settings_borrow_default(self) -> None:
        settings = self.get_settings(BORROW_BYTE_STRINGS=True)
        value = decode(b'4:spam', settings=settings)
        self.assertIsInstance(value.data, memoryview)
        value = decode(b'4:spam', borrow=False, settings=settings)
        self.assertIsInstance(value.data, bytes)
