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


from collections.abc import Hashable, Mapping
from dataclasses import is_dataclass
from enum import Enum, IntEnum
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, NamedTuple, TypeAlias, Union, get_args, get_origin

from structlog import get_logger

from bencodec.exceptions import UnsupportedTypeError
from bencodec.utils.typing import is_subclass
from bencodec.value import Value

if TYPE_CHECKING:
    from bencodec.btypes.btype import BType


logger = get_logger()

TypeAliasMap: TypeAlias = Mapping[Any, Any]
TypeToBTypeMap: TypeAlias = Mapping[Any, type['BType']]


class Record:
    """ Marker used as the `TypeToBTypeMap` key for dataclasses."""


class TaggedUnion:
    """ Marker used as the `TypeToBTypeMap` key for unions that don't include `None`, like `Circle | Square`."""


def is_union(type_: Any) -> bool:
    """
    >>> is_union(int | None)
    True
    >>> from typing import Optional
    >>> is_union(Optional[int])
    True
    >>> is_union(list[int])
    False
    """
    origin = get_origin(type_)
    return origin is Union or origin is UnionType


def is_namedtuple(type_: Any) -> bool:
    """ Whether the type is a `typing.NamedTuple` class (or a `collections.namedtuple`, which has no annotations).

    >>> class Point(NamedTuple):
    ...     x: int
    >>> is_namedtuple(Point)
    True
    >>> is_namedtuple(tuple)
    False
    """
    if NamedTuple in getattr(type_, '__orig_bases__', ()):
        return True
    return is_subclass(type_, tuple) and hasattr(type_, '_fields') and hasattr(type_, '_field_defaults')


def is_origin_hashable(type_: Any) -> bool:
    """ Checks whether the given type signature satisfies `collections.abc.Hashable`, ignoring type arguments.

    >>> is_origin_hashable(bytes)
    True
    >>> is_origin_hashable(int | str)
    True
    >>> is_origin_hashable(list[int])
    False
    >>> is_origin_hashable(frozenset[int])
    True
    """
    if is_union(type_):
        return all(is_origin_hashable(arg) for arg in get_args(type_))
    origin = get_origin(type_) or type_
    return is_subclass(origin, Hashable)


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__') or not hasattr(type_, '__name__'):
        return str(type_)
    else:
        return type_.__name__


def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, `bytearray` is mapped to `bytes` in the default alias map:

    >>> from bencodec.btypes import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(dict[str, list[bytearray]], alias_map, _verbose=False)
    dict[str, list[bytes]]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_
    replaced = False

    if origin_type is Union or origin_type is UnionType:
        aliased_origin = UnionType
    elif isinstance(origin_type, Hashable) and origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    type_args = get_args(type_)
    if not type_args:
        return (aliased_origin if replaced else type_), replaced

    # use _get_aliased_type for recursion so we don't log multiple times when a replacement happens
    aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
    aliased_args = tuple(arg for arg, _ in aliased_args_replaced)
    replaced = replaced or any(arg_replaced for _, arg_replaced in aliased_args_replaced)

    if not replaced:
        return type_, False

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), True

    return aliased_origin[aliased_args], True


def get_usable_origin_type(type_: Any, /, *, type_map: 'BType.TypeMap') -> Any:
    """ The purpose of this function is to map a given type into a key that is usable in a `BType.TypeMap`.

    The returned key is guaranteed to exist in `type_map.btypes_map`, or an `UnsupportedTypeError` is raised:

    >>> from bencodec.btypes import DEFAULT_TYPE_MAP as type_map
    >>> get_usable_origin_type(dict[str, int], type_map=type_map)
    <class 'dict'>
    >>> get_usable_origin_type(int | None, type_map=type_map) is UnionType
    True
    >>> try:
    ...     get_usable_origin_type(float, type_map=type_map)
    ... except UnsupportedTypeError as e:
    ...     print(e)
    type float is not supported by any BType class
    """
    if isinstance(type_, str):
        raise UnsupportedTypeError(f'string annotation {type_!r} must be resolved first')

    btypes_map = type_map.btypes_map
    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=False)
    origin = get_origin(aliased_type) or aliased_type

    if origin is Union or origin is UnionType:
        if NoneType in get_args(aliased_type):
            return UnionType
        return TaggedUnion

    if isinstance(origin, Hashable) and origin in btypes_map:
        return origin

    if NamedTuple in btypes_map and is_namedtuple(origin):
        return NamedTuple

    if Record in btypes_map and isinstance(origin, type) and is_dataclass(origin):
        return Record

    if IntEnum in btypes_map and is_subclass(origin, IntEnum):
        return IntEnum

    if Enum in btypes_map and is_subclass(origin, Enum):
        return Enum

    if Value in btypes_map and is_subclass(origin, Value):
        return Value

    # a NewType that isn't mapped on its own behaves like its supertype
    super_type = getattr(origin, '__supertype__', None)
    if super_type is not None:
        return get_usable_origin_type(super_type, type_map=type_map)

    raise UnsupportedTypeError(f'type {pretty_type(type_)} is not supported by any BType class')
