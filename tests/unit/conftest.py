"""
Unit Test Fixtures.

Fixtures for unit tests. Unit tests are fast and isolated and never
talk to a running server.
"""

from unittest.mock import MagicMock, patch

import pytest

from note_service.backend.core.concurrency import TracedThreadPoolExecutor


@pytest.fixture
def io_pool():
    """
    Private thread pool patched in place of the shared I/O pool.

    Keeps service tests from creating the process-wide pool.
    """
    pool = TracedThreadPoolExecutor(max_workers=4)
    with patch("note_service.backend.services.base.get_io_pool", return_value=pool):
        yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing log output.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                # Code that logs
            mock_logger.info.assert_called()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
