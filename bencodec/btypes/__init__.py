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


from collections import OrderedDict, deque
from enum import Enum, IntEnum
from types import NoneType, UnionType
from typing import NamedTuple, TypeVar, Union

from bencodec.btypes.bool_btype import BoolBType
from bencodec.btypes.btype import BType
from bencodec.btypes.bytes_btype import BytesBType
from bencodec.btypes.collection_btype import DequeBType, FrozenSetBType, ListBType, SetBType
from bencodec.btypes.dataclass_btype import DataclassBType
from bencodec.btypes.enum_btype import EnumBType, IntEnumBType
from bencodec.btypes.map_btype import DictBType, OrderedDictBType
from bencodec.btypes.namedtuple_btype import NamedTupleBType
from bencodec.btypes.null_btype import NullBType
from bencodec.btypes.optional_btype import OptionalBType
from bencodec.btypes.sized_int_btype import (
    Int8BType,
    Int16BType,
    Int32BType,
    Int64BType,
    Uint8BType,
    Uint16BType,
    Uint32BType,
    Uint64BType,
)
from bencodec.btypes.str_btype import StrBType
from bencodec.btypes.tuple_btype import TupleBType
from bencodec.btypes.utils import Record, TaggedUnion, TypeAliasMap, TypeToBTypeMap
from bencodec.btypes.value_btype import ValueBType
from bencodec.btypes.variant_btype import VariantBType
from bencodec.types import Int8, Int16, Int32, Int64, Uint8, Uint16, Uint32, Uint64
from bencodec.value import Value

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'DEFAULT_TYPE_TO_BTYPE_MAP',
    'BType',
    'BoolBType',
    'BytesBType',
    'DataclassBType',
    'DequeBType',
    'DictBType',
    'EnumBType',
    'FrozenSetBType',
    'Int8BType',
    'Int16BType',
    'Int32BType',
    'Int64BType',
    'IntEnumBType',
    'ListBType',
    'NamedTupleBType',
    'NullBType',
    'OptionalBType',
    'OrderedDictBType',
    'Record',
    'SetBType',
    'StrBType',
    'TaggedUnion',
    'TupleBType',
    'TypeAliasMap',
    'TypeToBTypeMap',
    'Uint8BType',
    'Uint16BType',
    'Uint32BType',
    'Uint64BType',
    'ValueBType',
    'VariantBType',
    'make_btype',
]

T = TypeVar('T')

DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    # XXX: technically types.UnionType is not a type, so mypy complains, but for our purposes it is a type
    Union: UnionType,  # type: ignore[dict-item]
    bytearray: bytes,
}

# Mapping between types and BType classes.
DEFAULT_TYPE_TO_BTYPE_MAP: TypeToBTypeMap = {
    # builtin types:
    bool: BoolBType,
    bytes: BytesBType,
    dict: DictBType,
    frozenset: FrozenSetBType,
    int: Int64BType,
    list: ListBType,
    set: SetBType,
    str: StrBType,
    tuple: TupleBType,
    # XXX: ignored dict-item because technically None is not a type, type[None]/NoneType is
    None: NullBType,  # type: ignore[dict-item]
    NoneType: NullBType,
    # other Python types:
    deque: DequeBType,
    OrderedDict: OrderedDictBType,
    UnionType: OptionalBType,
    TaggedUnion: VariantBType,
    NamedTuple: NamedTupleBType,
    Record: DataclassBType,
    IntEnum: IntEnumBType,
    Enum: EnumBType,
    Value: ValueBType,
    # sized integers:
    Int8: Int8BType,
    Int16: Int16BType,
    Int32: Int32BType,
    Int64: Int64BType,
    Uint8: Uint8BType,
    Uint16: Uint16BType,
    Uint32: Uint32BType,
    Uint64: Uint64BType,
}

DEFAULT_TYPE_MAP = BType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, DEFAULT_TYPE_TO_BTYPE_MAP)


def make_btype(type_: type[T], /) -> BType[T]:
    """ Like BType.from_type, but always with the default maps.

    If you need to customize the mapping use `BType.from_type` with a `type_map` instead.

    >>> btype = make_btype(dict[str, list[int]])
    >>> btype.to_bytes({'spam': [1, 2]})
    b'd4:spamli1ei2eee'
    >>> btype.from_bytes(b'd4:spamli1ei2eee')
    {'spam': [1, 2]}
    """
    return BType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
