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
Bencode has no boolean, this module maps them to integers:

- `False` maps to `b'i0e'`
- `True` maps to `b'i1e'`
- any other integer is invalid

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, False)
>>> encode_bool(se, True)
>>> bytes(se.finalize())
b'i0ei1e'

>>> de = Deserializer.build_bytes_deserializer(b'i0ei1e')
>>> decode_bool(de)
False
>>> decode_bool(de)
True
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(b'i2e')
>>> try:
...     decode_bool(de)
... except InvalidIntegerError as e:
...     print(e)
2 is not a valid boolean (at offset 0)
"""

from bencodec.encoding.integer import decode_integer, encode_integer
from bencodec.exceptions import InvalidIntegerError
from bencodec.serialization import Deserializer, Serializer


def encode_bool(serializer: Serializer, value: bool) -> None:
    """ Encodes a boolean value as the integer 0 or 1.
    """
    assert isinstance(value, bool)
    encode_integer(serializer, 1 if value else 0)


def decode_bool(deserializer: Deserializer) -> bool:
    """ Decodes a boolean value from the integer 0 or 1.
    """
    pos = deserializer.cur_pos()
    i = decode_integer(deserializer)
    if i == 0:
        return False
    elif i == 1:
        return True
    else:
        raise InvalidIntegerError(f'{i} is not a valid boolean', offset=pos)
