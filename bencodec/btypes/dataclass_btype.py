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


"""
Records are dataclasses, encoded as a dictionary keyed by field name.

- fields whose type is optional are omitted when their value is `None`, and are `None` when absent (unless the field
  has a default, which is used instead)
- a missing field that has no default and isn't optional is a `MissingFieldError`
- unknown keys are skipped, but their values must still be well-formed
"""

from __future__ import annotations

from dataclasses import MISSING, fields, is_dataclass
from typing import TYPE_CHECKING, Any, NamedTuple, TypeVar, get_type_hints

from structlog import get_logger
from typing_extensions import Self, override

from bencodec.btypes.btype import BType
from bencodec.compound_encoding.dictionary import decode_dictionary, encode_dictionary
from bencodec.compound_encoding.value import decode_value
from bencodec.exceptions import MissingFieldError, UnsupportedTypeError
from bencodec.serialization import Deserializer, Serializer

if TYPE_CHECKING:
    from _typeshed import DataclassInstance

logger = get_logger()

D = TypeVar('D', bound='DataclassInstance')

_SKIPPED = object()


class _Field(NamedTuple):
    name: str
    btype: BType
    has_default: bool


def _encode_field(serializer: Serializer, field_value: tuple[BType, Any]) -> None:
    btype, value = field_value
    btype.serialize(serializer, value)


class DataclassBType(BType[D]):
    __slots__ = ('_fields', '_class')
    _is_hashable = False  # it might be possible to calculate _is_hashable, but we don't need it
    _fields: dict[bytes, _Field]
    _class: type[D]

    def __init__(self, fields_: dict[bytes, _Field], class_: type[D]):
        self._fields = fields_
        self._class = class_

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: BType.TypeMap) -> Self:
        if not (isinstance(type_, type) and is_dataclass(type_)):
            raise UnsupportedTypeError('expected a dataclass')
        # XXX: resolves string annotations, for modules that use `from __future__ import annotations`
        type_hints = get_type_hints(type_)
        values: dict[bytes, _Field] = {}
        for field in fields(type_):
            if not field.init:
                continue
            has_default = field.default is not MISSING or field.default_factory is not MISSING
            btype = BType.from_type(type_hints[field.name], type_map=type_map)
            values[field.name.encode('utf-8')] = _Field(field.name, btype, has_default)
        return cls(values, type_)

    def is_unit(self) -> bool:
        """ A dataclass without fields carries no data, in a tagged union it's written as a bare name."""
        return not self._fields

    def build_unit(self) -> D:
        assert self.is_unit()
        return self._class()

    @override
    def _check_value(self, value: D, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise UnsupportedTypeError(f'expected {self._class.__name__} instance, got {type(value).__name__}')
        if deep:
            for field in self._fields.values():
                field_value = getattr(value, field.name)
                if field_value is None and field.btype.is_optional():
                    continue
                field.btype.entry_btype()._check_value(field_value, deep=True)

    @override
    def _serialize(self, serializer: Serializer, value: D, /) -> None:
        items: list[tuple[bytes, tuple[BType, Any]]] = []
        for key, field in self._fields.items():
            field_value = getattr(value, field.name)
            if field_value is None and field.btype.is_optional():
                continue
            items.append((key, (field.btype.entry_btype(), field_value)))
        encode_dictionary(serializer, items, _encode_field)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> D:
        start = deserializer.cur_pos()

        def decode_entry(key: bytes, de: Deserializer) -> Any:
            field = self._fields.get(key)
            if field is None:
                logger.debug('unknown field skipped', record=self._class.__name__, key=key, offset=de.cur_pos())
                decode_value(de)
                return _SKIPPED
            return field.btype.entry_btype().deserialize(de)

        entries = decode_dictionary(deserializer, decode_entry, list)
        kwargs: dict[str, Any] = {
            self._fields[key].name: field_value
            for key, field_value in entries
            if field_value is not _SKIPPED
        }
        for field in self._fields.values():
            if field.name in kwargs or field.has_default:
                continue
            if not field.btype.is_optional():
                raise MissingFieldError(f'missing field {field.name!r} of {self._class.__name__}', offset=start)
            kwargs[field.name] = None
        return self._class(**kwargs)
