import io
from pathlib import Path

import pytest
from pydantic import ValidationError

from bencodec import (
    DEFAULT_SETTINGS,
    BencodeSettings,
    BorrowedByteString,
    Profile,
    ProfileError,
    Value,
    decode,
    decode_from,
    decode_typed,
    decode_typed_from,
    encode,
    encode_to,
    encode_typed,
    encode_typed_to,
)
from bencodec.consts import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT
from bencodec.exceptions import DepthLimitExceededError
from bencodec.utils.yaml import dict_from_extended_yaml, dict_from_yaml


def test_default_settings() -> None:
    assert DEFAULT_SETTINGS.PROFILE is Profile.STD
    assert DEFAULT_SETTINGS.BORROW_BYTE_STRINGS is False
    assert DEFAULT_SETTINGS.ALLOW_TRAILING_DATA is False
    assert DEFAULT_SETTINGS.MAX_DEPTH == DEFAULT_MAX_DEPTH == 128
    assert DEFAULT_SETTINGS.MAX_BYTE_STRING_LENGTH is None
    assert DEFAULT_SETTINGS.MAX_INPUT_BYTES is None


def test_settings_are_frozen() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_SETTINGS.MAX_DEPTH = 1  # type: ignore[misc]


@pytest.mark.parametrize('filepath', ['base_settings.yml'])
def test_valid_settings_from_yaml(fixtures_dir: Path, filepath: str) -> None:
    settings = BencodeSettings.from_yaml(filepath=fixtures_dir / filepath)
    assert settings == BencodeSettings(MAX_DEPTH=32, MAX_BYTE_STRING_LENGTH=1048576)


def test_extended_settings_from_yaml(fixtures_dir: Path) -> None:
    settings = BencodeSettings.from_yaml(filepath=str(fixtures_dir / 'extended_settings.yml'))
    assert settings == BencodeSettings(
        PROFILE=Profile.ALLOC,
        ALLOW_TRAILING_DATA=True,
        MAX_DEPTH=16,
        MAX_BYTE_STRING_LENGTH=1048576,
    )


def test_empty_settings_from_yaml(fixtures_dir: Path) -> None:
    assert BencodeSettings.from_yaml(filepath=fixtures_dir / 'empty_settings.yml') == DEFAULT_SETTINGS


@pytest.mark.parametrize(
    ['filepath', 'error'],
    [
        ('invalid_settings.yml', 'MAX_DEPTH must be at least 1, got 0'),
        ('too_deep_settings.yml', 'MAX_DEPTH must be at most 150, got 100000'),
        ('unknown_key_settings.yml', 'Extra inputs are not permitted'),
    ]
)
def test_invalid_settings_from_yaml(fixtures_dir: Path, filepath: str, error: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        BencodeSettings.from_yaml(filepath=fixtures_dir / filepath)
    assert error in str(exc_info.value)


def test_max_depth_limit() -> None:
    settings = BencodeSettings(MAX_DEPTH=MAX_DEPTH_LIMIT)
    nested = b'l' * MAX_DEPTH_LIMIT + b'e' * MAX_DEPTH_LIMIT
    assert encode(decode(nested, settings=settings), settings=settings) == nested
    with pytest.raises(DepthLimitExceededError):
        decode(b'l' * 5000, settings=settings)
    with pytest.raises(DepthLimitExceededError):
        decode_typed(Value, b'l' * 5000, settings=settings)
    with pytest.raises(ValidationError):
        BencodeSettings(MAX_DEPTH=MAX_DEPTH_LIMIT + 1)


def test_recursive_yaml(fixtures_dir: Path) -> None:
    with pytest.raises(ValueError, match='Cannot parse yaml with recursive extensions.'):
        dict_from_extended_yaml(filepath=fixtures_dir / 'recursive_settings.yml')


def test_yaml_not_a_file(fixtures_dir: Path) -> None:
    with pytest.raises(ValueError, match='is not a file'):
        dict_from_yaml(filepath=fixtures_dir / 'missing.yml')


def test_yaml_not_a_dict(tmp_path: Path) -> None:
    filepath = tmp_path / 'list.yml'
    filepath.write_text('- 1\n- 2\n')
    with pytest.raises(ValueError, match='cannot be parsed as a dictionary'):
        dict_from_yaml(filepath=filepath)


def test_negative_limits() -> None:
    with pytest.raises(ValidationError):
        BencodeSettings(MAX_INPUT_BYTES=-1)
    with pytest.raises(ValidationError):
        BencodeSettings(MAX_BYTE_STRING_LENGTH=-1)


def test_minimal_profile() -> None:
    settings = BencodeSettings(PROFILE=Profile.MINIMAL)
    value = decode(b'4:spam', settings=settings)
    assert isinstance(value, BorrowedByteString)
    assert decode(b'4:spam', borrow=True, settings=settings) == value
    assert encode([1, b'a'], settings=settings) == b'li1e1:ae'
    assert encode_typed(list[int], [1], settings=settings) == b'li1ee'
    with pytest.raises(ProfileError):
        decode(b'4:spam', borrow=False, settings=settings)
    with pytest.raises(ProfileError):
        decode_typed(list[int], b'li1ee', settings=settings)
    with pytest.raises(ProfileError):
        decode_from(io.BytesIO(b'i1e'), settings=settings)
    with pytest.raises(ProfileError):
        encode_to(io.BytesIO(), 1, settings=settings)


def test_alloc_profile() -> None:
    settings = BencodeSettings(PROFILE=Profile.ALLOC)
    assert decode(b'4:spam', settings=settings).data == b'spam'
    assert decode_typed(list[int], b'li1ee', settings=settings) == [1]
    with pytest.raises(ProfileError):
        decode_typed_from(list[int], io.BytesIO(b'li1ee'), settings=settings)
    with pytest.raises(ProfileError):
        encode_typed_to(io.BytesIO(), list[int], [1], settings=settings)


def test_std_profile_streams() -> None:
    writer = io.BytesIO()
    assert encode_typed_to(writer, dict[str, int], {'a': 1}) == 8
    assert writer.getvalue() == b'd1:ai1ee'
    assert decode_typed_from(dict[str, int], io.BytesIO(writer.getvalue())) == {'a': 1}
