import pytest

from bencodec import BorrowedByteString, ByteString, Dictionary, Integer, List, Value, decode
from bencodec.exceptions import (
    DepthLimitExceededError,
    DuplicateKeyError,
    IntegerOverflowError,
    InvalidUtf8Error,
    UnsupportedShapeError,
    UnsupportedTypeError,
)


def test_from_python() -> None:
    value = Value.from_python({'name': 'spam', 'sizes': [1, 2], 'raw': b'\x00'})
    assert isinstance(value, Dictionary)
    assert value[b'name'] == ByteString(b'spam')
    assert value['sizes'] == List([Integer(1), Integer(2)])
    assert value.to_python() == {b'name': b'spam', b'raw': b'\x00', b'sizes': [1, 2]}


def test_from_python_keeps_values() -> None:
    value = ByteString(b'spam')
    assert Value.from_python(value) is value


def test_from_python_tuple() -> None:
    assert Value.from_python((1, 'a')) == List([1, 'a'])


def test_from_python_unsupported() -> None:
    with pytest.raises(UnsupportedTypeError):
        Value.from_python(1.0)
    with pytest.raises(UnsupportedTypeError):
        Value.from_python({1: 'a'})
    with pytest.raises(UnsupportedTypeError):
        Value.from_python({b'a', b'b'})
    with pytest.raises(UnsupportedShapeError):
        Value.from_python(None)


def test_from_python_omits_none_entries() -> None:
    assert Value.from_python({'a': None, 'b': 1}) == Dictionary({'b': 1})
    assert Value.from_python({'a': {'b': None}}) == Dictionary({'a': Dictionary()})
    with pytest.raises(UnsupportedTypeError):
        Value.from_python({1: None})


def test_text_without_utf8_form() -> None:
    with pytest.raises(InvalidUtf8Error):
        ByteString('\ud800')
    with pytest.raises(InvalidUtf8Error):
        Dictionary({'\udfff': 1})
    d = Dictionary()
    with pytest.raises(InvalidUtf8Error):
        d['\ud800'] = 1


def test_from_python_depth() -> None:
    assert Value.from_python([[[]]], max_depth=3) == List([List([List()])])
    with pytest.raises(DepthLimitExceededError):
        Value.from_python([[[[]]]], max_depth=3)


def test_integer_range() -> None:
    assert Integer(2**63 - 1).value == 2**63 - 1
    assert Integer(-2**63).value == -2**63
    with pytest.raises(IntegerOverflowError):
        Integer(2**63)
    with pytest.raises(IntegerOverflowError):
        Integer(-2**63 - 1)
    assert Integer(True) == Integer(1)


def test_equality() -> None:
    assert ByteString(b'a') == ByteString('a')
    assert ByteString(b'a') != ByteString(b'b')
    assert ByteString(b'1') != Integer(1)
    assert List([1]) != List([1, 2])
    assert Dictionary({'a': 1}) == Dictionary([(b'a', 1)])
    assert Dictionary({'a': 1}) != Dictionary({'a': 2})


def test_hashing() -> None:
    data = b'4:spam'
    borrowed = decode(data, borrow=True)
    assert isinstance(borrowed, BorrowedByteString)
    assert hash(borrowed) == hash(ByteString(b'spam'))
    assert {ByteString(b'spam'), borrowed} == {ByteString(b'spam')}
    assert len({Integer(1), Integer(1), Integer(2)}) == 2
    with pytest.raises(TypeError):
        hash(List())
    with pytest.raises(TypeError):
        hash(Dictionary())


def test_borrowed_to_owned() -> None:
    data = bytearray(b'4:spam')
    borrowed = decode(data, borrow=True)
    owned = borrowed.to_owned()
    assert type(owned) is ByteString
    assert isinstance(owned.data, bytes)
    assert owned == borrowed


def test_accessors() -> None:
    assert ByteString(b'spam').as_bytes() == b'spam'
    assert ByteString(b'spam').as_str() == 'spam'
    assert ByteString(b'\xff').as_str() is None
    assert ByteString(b'spam').as_int() is None
    assert Integer(3).as_int() == 3
    assert Integer(3).as_bytes() is None
    assert List([1]).as_list() == [Integer(1)]
    assert List([1]).as_dict() is None
    assert Dictionary({'a': 1}).as_dict() == {b'a': Integer(1)}
    assert Dictionary({'a': 1}).as_list() is None


def test_list_mutation() -> None:
    items = List()
    items.append(1)
    items.append('spam')
    items.insert(0, b'first')
    items[1] = [2]
    assert items == List([b'first', [2], 'spam'])
    del items[0]
    assert len(items) == 2
    assert items[:1] == List([[2]])


def test_dictionary_sorted() -> None:
    d = Dictionary({'zeta': 1, 'alpha': 2, b'\x00': 3})
    assert list(d) == [b'\x00', b'alpha', b'zeta']
    d['beta'] = 4
    assert list(d.keys()) == [b'\x00', b'alpha', b'beta', b'zeta']
    del d[b'alpha']
    assert 'alpha' not in d
    assert 'beta' in d
    assert 1 not in d


def test_dictionary_duplicate_keys() -> None:
    with pytest.raises(DuplicateKeyError):
        Dictionary([('a', 1), (b'a', 2)])


def test_dictionary_bad_key() -> None:
    with pytest.raises(UnsupportedTypeError):
        Dictionary({1: 'a'})
    d = Dictionary()
    with pytest.raises(UnsupportedTypeError):
        d[1] = 'a'  # type: ignore[index]


def test_repr() -> None:
    value = Value.from_python({'a': [1, b'x']})
    assert repr(value) == "Dictionary({b'a': List([Integer(1), ByteString(b'x')])})"
    assert repr(decode(b'1:x', borrow=True)) == "BorrowedByteString(b'x')"


def test_self_referential_list() -> None:
    items: list = []
    items.append(items)
    with pytest.raises(DepthLimitExceededError):
        Value.from_python(items)


def test_dictionary_get() -> None:
    d = Dictionary({'a': 1})
    assert d.get('a') == Integer(1)
    assert d.get('b') is None
