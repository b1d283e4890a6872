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

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

# widest integer any decoder accepts, used to reject absurdly long digit strings without buffering them
MAX_INTEGER_DIGITS = len(str(UINT64_MAX))

# a byte string length above this would never fit in memory anyway
MAX_LENGTH_DIGITS = 19

DEFAULT_MAX_DEPTH = 128

# each nesting level takes a few Python frames, this keeps them within the default recursion limit
MAX_DEPTH_LIMIT = 150

# token bytes
TOKEN_INTEGER = ord('i')
TOKEN_LIST = ord('l')
TOKEN_DICTIONARY = ord('d')
TOKEN_END = ord('e')
TOKEN_MINUS = ord('-')
TOKEN_COLON = ord(':')
DIGIT_ZERO = ord('0')
DIGIT_NINE = ord('9')
