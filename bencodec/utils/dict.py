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


from typing import Any, TypeVar

K = TypeVar('K')


def deep_merge(base: dict[K, Any], override: dict[K, Any]) -> dict[K, Any]:
    """
    Recursively merges two dicts into a new one, values from `override` take precedence. Both inputs are left intact.

    >>> base = dict(a=1, b=dict(c=2, d=3), e=dict(f=4))
    >>> result = deep_merge(base, dict(b=dict(d=5, e=6), e=7))
    >>> result == dict(a=1, b=dict(c=2, d=5, e=6), e=7)
    True
    >>> base == dict(a=1, b=dict(c=2, d=3), e=dict(f=4))
    True
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
