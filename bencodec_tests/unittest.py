import secrets
from random import Random
from typing import Optional
from unittest import main as ut_main

from structlog import get_logger
from twisted.trial import unittest

from bencodec.conf import DEFAULT_SETTINGS, BencodeSettings

logger = get_logger()
main = ut_main


class TestCase(unittest.TestCase):
    seed_config: Optional[int] = None

    def setUp(self) -> None:
        self.log = logger.new()
        self.seed = secrets.randbits(64) if self.seed_config is None else self.seed_config
        self.log.info('set seed', seed=self.seed)
        self.rng = Random(self.seed)
        self._settings = DEFAULT_SETTINGS

    def get_settings(self, **kwargs: object) -> BencodeSettings:
        """ A copy of the default settings with some fields replaced, validated like any other settings."""
        return BencodeSettings.model_validate({**self._settings.model_dump(), **kwargs})

    def random_bytes(self, size: int) -> bytes:
        return self.rng.randbytes(size)
