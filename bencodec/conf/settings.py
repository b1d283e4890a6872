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


from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import field_validator
from structlog import get_logger

from bencodec.consts import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from bencodec.exceptions import ProfileError
from bencodec.utils.pydantic import BaseModel
from bencodec.utils.yaml import dict_from_extended_yaml

logger = get_logger()


class Profile(str, Enum):
    """ Which entry points and storage modes are available, the wire format is the same for all of them.
    """

    # only borrowed output from in-memory buffers
    MINIMAL = 'minimal'
    # adds owned values and growable output buffers
    ALLOC = 'alloc'
    # adds reading from and writing to streams
    STD = 'std'


class BencodeSettings(BaseModel):
    """ Configuration of the codec entry points, instances are immutable.

    >>> settings = BencodeSettings(MAX_DEPTH=16)
    >>> settings.MAX_DEPTH
    16
    >>> settings.PROFILE
    <Profile.STD: 'std'>
    """

    # available entry points and storage modes
    PROFILE: Profile = Profile.STD

    # default for `decode(..., borrow=)`, always enabled in the minimal profile
    BORROW_BYTE_STRINGS: bool = False

    # default for `allow_trailing=`, when disabled the input must be fully consumed
    ALLOW_TRAILING_DATA: bool = False

    # maximum container nesting, both when encoding and decoding, at most MAX_DEPTH_LIMIT
    MAX_DEPTH: int = DEFAULT_MAX_DEPTH

    # maximum declared length of a single byte string, unlimited when None
    MAX_BYTE_STRING_LENGTH: Optional[int] = None

    # maximum number of bytes read by a single decode, unlimited when None
    MAX_INPUT_BYTES: Optional[int] = None

    @field_validator('MAX_DEPTH')
    @classmethod
    def _validate_max_depth(cls, max_depth: int) -> int:
        if max_depth < 1:
            raise ValueError(f'MAX_DEPTH must be at least 1, got {max_depth}')
        if max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f'MAX_DEPTH must be at most {MAX_DEPTH_LIMIT}, got {max_depth}')
        return max_depth

    @field_validator('MAX_BYTE_STRING_LENGTH', 'MAX_INPUT_BYTES')
    @classmethod
    def _validate_optional_limit(cls, limit: Optional[int]) -> Optional[int]:
        if limit is not None and limit < 0:
            raise ValueError(f'limit cannot be negative, got {limit}')
        return limit

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'BencodeSettings':
        """Takes a filepath to a yaml file and returns a validated BencodeSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        logger.debug('loading settings', filepath=str(filepath))
        return cls.model_validate(settings_dict)

    def effective_borrow(self, borrow: Optional[bool]) -> bool:
        """ Resolve the borrow mode of a decode call, `None` means the configured default.

        >>> BencodeSettings().effective_borrow(None)
        False
        >>> BencodeSettings(PROFILE=Profile.MINIMAL).effective_borrow(None)
        True
        """
        if self.PROFILE is Profile.MINIMAL:
            if borrow is False:
                raise ProfileError('owned output is not available in the minimal profile')
            return True
        return self.BORROW_BYTE_STRINGS if borrow is None else borrow

    def effective_allow_trailing(self, allow_trailing: Optional[bool]) -> bool:
        return self.ALLOW_TRAILING_DATA if allow_trailing is None else allow_trailing

    def require_streams(self) -> None:
        """ Raise `ProfileError` unless reader and writer entry points are available."""
        if self.PROFILE is not Profile.STD:
            raise ProfileError(f'streams are not available in the {self.PROFILE.value} profile')

    def require_owned(self) -> None:
        """ Raise `ProfileError` unless owned values are available."""
        if self.PROFILE is Profile.MINIMAL:
            raise ProfileError('owned output is not available in the minimal profile')


DEFAULT_SETTINGS = BencodeSettings()
