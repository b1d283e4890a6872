from pathlib import Path

import pytest
import structlog

FIXTURES_DIR = Path(__file__).parent / 'fixtures'

# route logs through the stdlib, which drops debug messages by default, so nothing is printed into doctest output
# XXX: loggers must not be cached, otherwise `structlog.testing.capture_logs` can't replace the processors
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=False),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
