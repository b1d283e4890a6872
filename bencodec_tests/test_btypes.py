from collections import OrderedDict, deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import NamedTuple, NewType, Optional

import pytest
from structlog.testing import capture_logs

from bencodec import BType, Dictionary, List, Value, decode_typed, encode_typed, make_btype
from bencodec.btypes import DataclassBType, OptionalBType, VariantBType
from bencodec.exceptions import (
    IntegerOverflowError,
    InvalidDictionaryKeyOrderError,
    InvalidIntegerError,
    InvalidUtf8Error,
    InvalidVariantEncodingError,
    MissingFieldError,
    UnexpectedTokenError,
    UnsupportedShapeError,
    UnsupportedTypeError,
)
from bencodec.types import Int8, Uint8, Uint64

Hash = NewType('Hash', bytes)


@dataclass
class Torrent:
    name: str
    length: Uint64
    pieces: list[bytes]
    comment: Optional[str] = None
    private: bool = False


@dataclass
class Node:
    label: str
    parent: Optional[str]


@dataclass
class Wrapper:
    torrent: 'Torrent'
    tags: set[str] = field(default_factory=set)


@dataclass
class Circle:
    radius: int


@dataclass
class Square:
    side: int


@dataclass
class Empty:
    pass


class Color(Enum):
    RED = 'r'
    GREEN = 'g'


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Point(NamedTuple):
    x: int
    y: int


def test_record_round_trip() -> None:
    btype = make_btype(Torrent)
    assert isinstance(btype, DataclassBType)
    torrent = Torrent(name='spam', length=Uint64(42), pieces=[b'ab'])
    data = btype.to_bytes(torrent)
    assert data == b'd6:lengthi42e4:name4:spam6:piecesl2:abe7:privatei0ee'
    assert btype.from_bytes(data) == torrent


def test_record_optional_field_present() -> None:
    torrent = Torrent(name='spam', length=Uint64(1), pieces=[], comment='hi')
    data = encode_typed(Torrent, torrent)
    assert data == b'd7:comment2:hi6:lengthi1e4:name4:spam6:piecesle7:privatei0ee'
    assert decode_typed(Torrent, data) == torrent


def test_record_defaults() -> None:
    assert decode_typed(Torrent, b'd6:lengthi1e4:name4:spam6:pieceslee') == Torrent('spam', Uint64(1), [])


def test_record_optional_without_default() -> None:
    btype = make_btype(Node)
    assert btype.from_bytes(b'd5:label1:ae') == Node('a', None)
    assert btype.to_bytes(Node('a', None)) == b'd5:label1:ae'
    assert btype.to_bytes(Node('a', 'b')) == b'd5:label1:a6:parent1:be'


def test_record_missing_field() -> None:
    with pytest.raises(MissingFieldError) as exc_info:
        decode_typed(Torrent, b'd6:lengthi1e6:pieceslee')
    assert exc_info.value.offset == 0
    assert "'name'" in str(exc_info.value)


def test_record_unknown_field() -> None:
    data = b'd5:extrali1ee6:lengthi1e4:name4:spam6:pieceslee'
    with capture_logs() as log_list:
        torrent = decode_typed(Torrent, data)
    assert torrent == Torrent('spam', Uint64(1), [])
    assert any(log['event'] == 'unknown field skipped' for log in log_list)
    # skipped values must still be well-formed
    with pytest.raises(UnexpectedTokenError):
        decode_typed(Torrent, b'd5:extrax6:lengthi1e4:name4:spam6:piecesle')


def test_record_not_canonical() -> None:
    with pytest.raises(InvalidDictionaryKeyOrderError):
        decode_typed(Torrent, b'd4:name4:spam6:lengthi1e6:piecesle')


def test_record_forward_reference() -> None:
    wrapper = Wrapper(Torrent('spam', Uint64(1), []), {'b', 'a'})
    data = encode_typed(Wrapper, wrapper)
    assert data == b'd4:tagsl1:a1:be7:torrentd6:lengthi1e4:name4:spam6:piecesle7:privatei0eee'
    assert decode_typed(Wrapper, data) == wrapper


def test_record_check_value() -> None:
    btype = make_btype(Torrent)
    with pytest.raises(UnsupportedTypeError):
        btype.check_value(Torrent(name=1, length=Uint64(1), pieces=[]))  # type: ignore[arg-type]
    with pytest.raises(UnsupportedTypeError):
        btype.check_value(Node('a', None))  # type: ignore[arg-type]


def test_map_omits_none() -> None:
    btype = make_btype(dict[str, Optional[int]])
    assert btype.to_bytes({'b': None, 'a': 1}) == b'd1:ai1ee'
    assert btype.from_bytes(b'd1:ai1ee') == {'a': 1}


def test_map_keys() -> None:
    assert make_btype(dict[bytes, int]).from_bytes(b'd1:\xffi1ee') == {b'\xff': 1}
    with pytest.raises(InvalidUtf8Error):
        make_btype(dict[str, int]).from_bytes(b'd1:\xffi1ee')
    with pytest.raises(UnsupportedTypeError):
        make_btype(dict[int, int])


def test_ordered_dict() -> None:
    btype = make_btype(OrderedDict[str, int])
    value = btype.from_bytes(b'd1:ai1e1:bi2ee')
    assert isinstance(value, OrderedDict)
    assert list(value.items()) == [('a', 1), ('b', 2)]
    assert btype.to_bytes(OrderedDict([('b', 2), ('a', 1)])) == b'd1:ai1e1:bi2ee'


def test_bare_optional() -> None:
    btype = make_btype(Optional[int])
    assert isinstance(btype, OptionalBType)
    with pytest.raises(UnsupportedShapeError):
        btype.to_bytes(None)
    with pytest.raises(UnsupportedShapeError):
        btype.to_bytes(3)
    with pytest.raises(UnsupportedShapeError) as exc_info:
        decode_typed(int | None, b'i1e')
    assert exc_info.value.offset == 0


def test_optional_list_items() -> None:
    btype = make_btype(list[Optional[int]])
    with pytest.raises(UnsupportedShapeError):
        btype.to_bytes([1, None])
    with pytest.raises(UnsupportedShapeError):
        btype.to_bytes([1])
    with pytest.raises(UnsupportedShapeError) as exc_info:
        decode_typed(list[int | None], b'li1ee')
    assert exc_info.value.offset == 1
    # an empty list holds no optional item
    assert btype.from_bytes(b'le') == []


def test_enum() -> None:
    btype = make_btype(Color)
    assert btype.to_bytes(Color.GREEN) == b'5:GREEN'
    assert btype.from_bytes(b'3:RED') is Color.RED
    with pytest.raises(InvalidVariantEncodingError):
        btype.from_bytes(b'4:BLUE')
    with pytest.raises(InvalidVariantEncodingError):
        btype.from_bytes(b'd3:REDi1ee')
    with pytest.raises(UnsupportedTypeError):
        btype.to_bytes('RED')


def test_int_enum() -> None:
    btype = make_btype(Priority)
    assert btype.to_bytes(Priority.HIGH) == b'i2e'
    assert btype.from_bytes(b'i1e') is Priority.LOW
    with pytest.raises(InvalidVariantEncodingError):
        btype.from_bytes(b'i3e')


def test_tagged_union() -> None:
    btype = make_btype(Circle | Square | Empty)
    assert isinstance(btype, VariantBType)
    assert btype.to_bytes(Circle(2)) == b'd6:Circled6:radiusi2eee'
    assert btype.to_bytes(Empty()) == b'5:Empty'
    assert btype.from_bytes(b'd6:Squared4:sidei3eee') == Square(3)
    assert btype.from_bytes(b'5:Empty') == Empty()
    with pytest.raises(InvalidVariantEncodingError):
        btype.from_bytes(b'6:Circle')
    with pytest.raises(InvalidVariantEncodingError):
        btype.from_bytes(b'd5:Emptydee')
    with pytest.raises(InvalidVariantEncodingError):
        btype.from_bytes(b'd6:Circled6:radiusi2ee6:Squared4:sidei3eee')
    with pytest.raises(UnsupportedTypeError):
        btype.to_bytes(3)


def test_optional_tagged_union_field() -> None:
    @dataclass
    class Drawing:
        shape: Optional[Circle | Square]

    btype = make_btype(Drawing)
    assert btype.to_bytes(Drawing(None)) == b'de'
    assert btype.from_bytes(b'de') == Drawing(None)
    assert btype.from_bytes(b'd5:shaped6:Squared4:sidei1eeee') == Drawing(Square(1))


def test_primitive_union() -> None:
    btype = make_btype(int | str)
    assert btype.to_bytes(5) == b'd3:inti5ee'
    assert btype.to_bytes('a') == b'd3:str1:ae'
    assert btype.from_bytes(b'd3:str1:ae') == 'a'


def test_namedtuple() -> None:
    btype = make_btype(Point)
    assert btype.to_bytes(Point(1, 2)) == b'li1ei2ee'
    assert btype.from_bytes(b'li1ei2ee') == Point(1, 2)
    with pytest.raises(UnexpectedTokenError):
        btype.from_bytes(b'li1ee')


def test_tuples() -> None:
    assert make_btype(tuple[int, str]).to_bytes((1, 'a')) == b'li1e1:ae'
    assert make_btype(tuple[int, str]).from_bytes(b'li1e1:ae') == (1, 'a')
    assert make_btype(tuple[int, ...]).from_bytes(b'li1ei2ei3ee') == (1, 2, 3)
    with pytest.raises(UnsupportedTypeError):
        make_btype(tuple[int, str]).to_bytes((1,))


def test_collections() -> None:
    assert make_btype(set[int]).to_bytes({3, 1, 2}) == b'li1ei2ei3ee'
    assert make_btype(set[int]).from_bytes(b'li1ei2ee') == {1, 2}
    assert make_btype(frozenset[str]).from_bytes(b'l1:ae') == frozenset({'a'})
    assert make_btype(deque[int]).from_bytes(b'li1ee') == deque([1])
    assert make_btype(list[list[int]]).to_bytes([[1], []]) == b'lli1eelee'


def test_sized_integers() -> None:
    assert make_btype(Uint8).to_bytes(Uint8(255)) == b'i255e'
    with pytest.raises(IntegerOverflowError):
        make_btype(Uint8).to_bytes(Uint8(256))
    with pytest.raises(IntegerOverflowError):
        make_btype(Uint8).from_bytes(b'i256e')
    with pytest.raises(IntegerOverflowError):
        make_btype(Int8).from_bytes(b'i-129e')
    max_uint64 = 2**64 - 1
    assert make_btype(Uint64).to_bytes(Uint64(max_uint64)) == b'i18446744073709551615e'
    assert make_btype(Uint64).from_bytes(b'i18446744073709551615e') == max_uint64
    with pytest.raises(IntegerOverflowError):
        make_btype(int).to_bytes(2**63)
    with pytest.raises(UnsupportedTypeError):
        make_btype(int).to_bytes(True)


def test_bool() -> None:
    btype = make_btype(bool)
    assert btype.to_bytes(True) == b'i1e'
    assert btype.from_bytes(b'i0e') is False
    with pytest.raises(InvalidIntegerError):
        btype.from_bytes(b'i2e')


def test_bytes_newtype() -> None:
    btype = make_btype(Hash)
    assert btype.to_bytes(Hash(b'\x00\x01')) == b'2:\x00\x01'
    assert btype.from_bytes(b'2:\x00\x01') == b'\x00\x01'
    assert make_btype(bytearray).to_bytes(bytearray(b'ab')) == b'2:ab'


def test_null() -> None:
    btype = make_btype(None)
    assert btype.to_bytes(None) == b'0:'
    assert btype.from_bytes(b'0:') is None
    with pytest.raises(UnexpectedTokenError):
        btype.from_bytes(b'1:a')


def test_value_fields() -> None:
    btype = make_btype(dict[str, Value])
    value = btype.from_bytes(b'd1:ali1ee1:bi2ee')
    assert value == {'a': List([1]), 'b': Value.from_python(2)}
    assert btype.to_bytes(value) == b'd1:ali1ee1:bi2ee'
    with pytest.raises(UnexpectedTokenError):
        make_btype(Dictionary).from_bytes(b'le')


def test_unsupported_types() -> None:
    with pytest.raises(UnsupportedTypeError):
        make_btype(float)
    with pytest.raises(UnsupportedTypeError):
        make_btype(list[complex])
    with pytest.raises(UnsupportedTypeError):
        make_btype(Circle | Circle | Optional[Square] | float)


def test_deep_check() -> None:
    btype = make_btype(list[int])
    btype.check_value([1, 2])
    with pytest.raises(UnsupportedTypeError):
        btype.check_value([1, 'a'])


def test_btype_is_reusable() -> None:
    btype: BType[list[str]] = make_btype(list[str])
    for value in (['a'], [], ['b', 'c']):
        assert btype.from_bytes(btype.to_bytes(value)) == value
    assert decode_typed(btype, encode_typed(btype, ['x'])) == ['x']
