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
Canonical Bencode codec.

Dynamic values go through `encode`/`decode` and the `Value` classes, structured data goes through `encode_typed`/
`decode_typed` and the `BType` classes, which can also be built once and reused.
"""

from bencodec.btypes import BType, make_btype
from bencodec.codec import (
    decode,
    decode_from,
    decode_typed,
    decode_typed_from,
    encode,
    encode_to,
    encode_typed,
    encode_typed_to,
)
from bencodec.conf import DEFAULT_SETTINGS, BencodeSettings, Profile
from bencodec.exceptions import BencodeError, ErrorKind, ProfileError
from bencodec.value import BorrowedByteString, ByteString, Dictionary, Integer, List, Value
from bencodec.version import __version__

__all__ = [
    'DEFAULT_SETTINGS',
    'BType',
    'BencodeError',
    'BencodeSettings',
    'BorrowedByteString',
    'ByteString',
    'Dictionary',
    'ErrorKind',
    'Integer',
    'List',
    'Profile',
    'ProfileError',
    'Value',
    '__version__',
    'decode',
    'decode_from',
    'decode_typed',
    'decode_typed_from',
    'encode',
    'encode_to',
    'encode_typed',
    'encode_typed_to',
    'make_btype',
]
