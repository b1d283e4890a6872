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
This module was made to hold compound encoding implementations.

Compound encoders are encoders that are generic in some way and will delegate the encoding of some portion to another
encoder. For example a list encoder writes the `l` and `e` delimiters and delegates each item to an encoder that knows
how to encode the item type.

The general organization should be that each submodule `x` deals with a single shape and look like this:

    def encode_x(serializer: Serializer, value: ValueType, ...encoders...) -> None:
        ...

    def decode_x(deserializer: Deserializer, ...decoders..., builder) -> ValueType:
        ...

Every container encoder/decoder wraps its items with `nested()`, so the depth limit is enforced in a single place.
"""

from typing import Protocol, TypeVar

from bencodec.serialization.deserializer import Deserializer
from bencodec.serialization.serializer import Serializer

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)


class Decoder(Protocol[T_co]):
    def __call__(self, deserializer: Deserializer, /) -> T_co:
        ...


class Encoder(Protocol[T_contra]):
    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...


class KeyedDecoder(Protocol[T_co]):
    """ A decoder for dictionary values that can depend on the (already decoded) key."""

    def __call__(self, key: bytes, deserializer: Deserializer, /) -> T_co:
        ...
