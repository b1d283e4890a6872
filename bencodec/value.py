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
The dynamic representation of any Bencode document.

A `Value` is one of `ByteString` (or its zero-copy flavor `BorrowedByteString`), `Integer`, `List` or `Dictionary`.
Native Python objects can be converted in both directions:

>>> value = Value.from_python({'spam': [1, b'eggs'], 'cow': 'moo'})
>>> value
Dictionary({b'cow': ByteString(b'moo'), b'spam': List([Integer(1), ByteString(b'eggs')])})
>>> value.to_python()
{b'cow': b'moo', b'spam': [1, b'eggs']}

Accessors return `None` when the shape doesn't match instead of raising:

>>> value.as_int() is None
True
>>> value[b'cow'].as_str()
'moo'
>>> value.get('spam').as_list()
[Integer(1), ByteString(b'eggs')]

A `Dictionary` is always sorted by the raw bytes of its keys, whatever the insertion order:

>>> d = Dictionary()
>>> d['z'] = 1
>>> d[b'a'] = 2
>>> list(d)
[b'a', b'z']

Integers are limited to the signed 64-bit range and there's no representation for `None` or `float`:

>>> try:
...     Integer(2**63)
... except IntegerOverflowError as e:
...     print(e)
9223372036854775808 is out of range [-9223372036854775808, 9223372036854775807]
>>> try:
...     Value.from_python(1.5)
... except UnsupportedTypeError as e:
...     print(e)
float has no bencode representation
>>> try:
...     Value.from_python([None])
... except UnsupportedShapeError as e:
...     print(e)
None can only be represented by omitting a dictionary entry
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, MutableMapping, MutableSequence
from typing import Any, Optional, SupportsIndex, Union, overload

from sortedcontainers import SortedDict

from bencodec.consts import DEFAULT_MAX_DEPTH, INT64_MAX, INT64_MIN
from bencodec.encoding.utf8 import utf8_bytes
from bencodec.exceptions import (
    DepthLimitExceededError,
    DuplicateKeyError,
    IntegerOverflowError,
    UnsupportedShapeError,
    UnsupportedTypeError,
)

KeyLike = Union[bytes, bytearray, memoryview, str, 'ByteString']


def _no_representation(obj: object) -> UnsupportedTypeError:
    return UnsupportedTypeError(f'{type(obj).__name__} has no bencode representation')


class Value(ABC):
    """ Base class of every Bencode value.

    Equality is structural, `ByteString` and `Integer` are hashable, `List` and `Dictionary` are mutable and not
    hashable.
    """

    __slots__ = ()

    @staticmethod
    def from_python(obj: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
        """ Convert a native object into a `Value`, values are returned unchanged.

        - `bool` and `int` become `Integer`
        - `bytes`, `bytearray`, `memoryview` and `str` become `ByteString` (text is encoded as UTF-8)
        - `list` and `tuple` become `List`
        - any `Mapping` becomes `Dictionary`, entries whose value is `None` are omitted
        """
        return _from_python(obj, 0, max_depth)

    @abstractmethod
    def to_python(self) -> Any:
        """ Convert back to native objects: `bytes`, `int`, `list` and `dict`."""
        raise NotImplementedError

    def to_owned(self) -> Value:
        """ Return a value that doesn't reference any external buffer."""
        return self

    def as_bytes(self) -> Optional[bytes]:
        return None

    def as_str(self) -> Optional[str]:
        return None

    def as_int(self) -> Optional[int]:
        return None

    def as_list(self) -> Optional[list[Value]]:
        return None

    def as_dict(self) -> Optional[dict[bytes, Value]]:
        return None


class ByteString(Value):
    """ An owned byte string."""

    __slots__ = ('_data',)

    _data: bytes | memoryview

    def __init__(self, data: bytes | bytearray | memoryview | str) -> None:
        if isinstance(data, str):
            self._data = utf8_bytes(data)
        elif isinstance(data, (bytes, bytearray, memoryview)):
            self._data = bytes(data)
        else:
            raise _no_representation(data)

    @property
    def data(self) -> bytes | memoryview:
        """ The raw payload, a `memoryview` for borrowed byte strings."""
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteString):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(bytes(self._data))

    def __repr__(self) -> str:
        return f'{type(self).__name__}({bytes(self._data)!r})'

    def to_python(self) -> bytes:
        return bytes(self._data)

    def as_bytes(self) -> bytes:
        return bytes(self._data)

    def as_str(self) -> Optional[str]:
        try:
            return str(self._data, 'utf-8')
        except UnicodeDecodeError:
            return None


class BorrowedByteString(ByteString):
    """ A byte string that is a read-only view into the buffer it was decoded from.

    The source buffer must outlive the value, use `to_owned()` to detach it.
    """

    __slots__ = ()

    def __init__(self, view: memoryview) -> None:
        assert isinstance(view, memoryview)
        self._data = view.toreadonly()

    def to_owned(self) -> ByteString:
        return ByteString(self._data)


class Integer(Value):
    """ A signed 64-bit integer."""

    __slots__ = ('_value',)

    _value: int

    def __init__(self, value: int) -> None:
        if not isinstance(value, int):
            raise _no_representation(value)
        # XXX: bool is accepted and stored as a plain int
        number = int(value)
        if not (INT64_MIN <= number <= INT64_MAX):
            raise IntegerOverflowError(f'{number} is out of range [{INT64_MIN}, {INT64_MAX}]')
        self._value = number

    @property
    def value(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Integer):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f'Integer({self._value})'

    def to_python(self) -> int:
        return self._value

    def as_int(self) -> int:
        return self._value


class List(Value, MutableSequence[Value]):
    """ An ordered sequence of values, items are coerced with `Value.from_python`."""

    __slots__ = ('_items',)

    _items: list[Value]

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items = [Value.from_python(item) for item in items]

    @classmethod
    def _from_values(cls, items: list[Value]) -> List:
        # items are already values, skip the coercion
        new = cls.__new__(cls)
        new._items = items
        return new

    @overload
    def __getitem__(self, index: SupportsIndex) -> Value:
        ...

    @overload
    def __getitem__(self, index: slice) -> List:
        ...

    def __getitem__(self, index: SupportsIndex | slice) -> Value | List:
        if isinstance(index, slice):
            return List._from_values(self._items[index])
        return self._items[index]

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._items[index] = [Value.from_python(item) for item in value]
        else:
            self._items[index] = Value.from_python(value)

    def __delitem__(self, index: SupportsIndex | slice) -> None:
        del self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._items)

    def insert(self, index: int, value: Any) -> None:
        self._items.insert(index, Value.from_python(value))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, List):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'List({self._items!r})'

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self._items]

    def to_owned(self) -> List:
        return List._from_values([item.to_owned() for item in self._items])

    def as_list(self) -> list[Value]:
        return list(self._items)


def _coerce_key(key: Any) -> bytes:
    if isinstance(key, bytes):
        return key
    if isinstance(key, ByteString):
        return key.as_bytes()
    if isinstance(key, str):
        return utf8_bytes(key)
    if isinstance(key, (bytearray, memoryview)):
        return bytes(key)
    raise UnsupportedTypeError(f'{type(key).__name__} cannot be a dictionary key')


class Dictionary(Value, MutableMapping[bytes, Value]):
    """ A mapping of byte string keys to values, always sorted by key.

    Keys can be given as `bytes`, `str` (encoded as UTF-8) or `ByteString`, they're always stored as `bytes`. When
    constructing from a mapping or from pairs, two keys that are equal after this conversion are a
    `DuplicateKeyError`.
    """

    __slots__ = ('_entries',)

    _entries: SortedDict

    def __init__(self, entries: Mapping[Any, Any] | Iterable[tuple[Any, Any]] = ()) -> None:
        self._entries = SortedDict()
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for key, value in pairs:
            raw_key = _coerce_key(key)
            if raw_key in self._entries:
                raise DuplicateKeyError(f'duplicate key {raw_key!r}')
            self._entries[raw_key] = Value.from_python(value)

    @classmethod
    def _from_sorted(cls, items: Iterable[tuple[bytes, Value]]) -> Dictionary:
        # keys are already unique bytes and values are already values, skip the checks
        new = cls.__new__(cls)
        new._entries = SortedDict(items)
        return new

    def __getitem__(self, key: KeyLike) -> Value:
        return self._entries[_coerce_key(key)]

    def __setitem__(self, key: KeyLike, value: Any) -> None:
        self._entries[_coerce_key(key)] = Value.from_python(value)

    def __delitem__(self, key: KeyLike) -> None:
        del self._entries[_coerce_key(key)]

    def __contains__(self, key: object) -> bool:
        try:
            return _coerce_key(key) in self._entries
        except UnsupportedTypeError:
            return False

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f'Dictionary({dict(self._entries)!r})'

    def to_python(self) -> dict[bytes, Any]:
        return {key: value.to_python() for key, value in self._entries.items()}

    def to_owned(self) -> Dictionary:
        return Dictionary._from_sorted((key, value.to_owned()) for key, value in self._entries.items())

    def as_dict(self) -> dict[bytes, Value]:
        return dict(self._entries)


def _from_python(obj: Any, depth: int, max_depth: int) -> Value:
    if isinstance(obj, Value):
        return obj
    if obj is None:
        raise UnsupportedShapeError('None can only be represented by omitting a dictionary entry')
    if isinstance(obj, float):
        raise _no_representation(obj)
    if isinstance(obj, int):
        return Integer(obj)
    if isinstance(obj, (bytes, bytearray, memoryview, str)):
        return ByteString(obj)
    if isinstance(obj, (list, tuple, Mapping)):
        if depth >= max_depth:
            raise DepthLimitExceededError(f'nesting deeper than {max_depth} levels')
        if isinstance(obj, Mapping):
            entries = []
            for key, value in obj.items():
                if value is None:
                    # absent entry, the key must still be valid
                    _coerce_key(key)
                    continue
                entries.append((key, _from_python(value, depth + 1, max_depth)))
            return Dictionary(entries)
        return List._from_values([_from_python(item, depth + 1, max_depth) for item in obj])
    raise _no_representation(obj)
