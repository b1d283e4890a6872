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
The byte sink (`Serializer`) and byte source (`Deserializer`) abstractions used by every encoder and decoder.

Two families of implementations are provided:

- `BytesSerializer`/`BytesDeserializer` work in memory; the deserializer hands out read-only views into the caller's
  buffer (borrow mode)
- `StreamSerializer`/`StreamDeserializer` work over binary file-like objects; the deserializer always copies
  (owned mode)
"""

from .deserializer import Deserializer
from .serializer import Serializer
from .types import Buffer

__all__ = [
    'Buffer',
    'Deserializer',
    'Serializer',
]
