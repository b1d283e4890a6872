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


from types import UnionType


def resolve_newtype(type_: object, /) -> object:
    """ Follow `NewType` supertypes until a regular type is reached.

    >>> from typing import NewType
    >>> UserId = NewType('UserId', int)
    >>> AdminId = NewType('AdminId', UserId)
    >>> resolve_newtype(AdminId)
    <class 'int'>
    >>> resolve_newtype(str)
    <class 'str'>
    """
    while (super_type := getattr(type_, '__supertype__', None)) is not None:
        type_ = super_type
    return type_


def is_subclass(cls: object, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Like `issubclass()` but with support for `NewType` as arg 1, and returns `False` for non-classes.

    >>> from typing import NewType
    >>> Name = NewType('Name', str)
    >>> is_subclass(Name, str)
    True
    >>> is_subclass(Name, bytes | int)
    False
    >>> is_subclass(bool, int)
    True
    >>> is_subclass(list[int], list)
    False
    """
    resolved = resolve_newtype(cls)
    if not isinstance(resolved, type):
        return False
    return issubclass(resolved, class_or_tuple)
