"""
Logging Setup Tests
===================
Handlers on the package logger, repeated setup and the optional log file.
"""
import logging

import pytest

from beliefgraph.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)


class TestSetupLogging:

    def test_repeated_setup_does_not_stack_handlers(self, package_logger):
        setup_logging()
        setup_logging()
        assert len(package_logger.handlers) == 1

    def test_level_is_applied(self, package_logger):
        setup_logging(level=logging.DEBUG)
        assert package_logger.level == logging.DEBUG

    def test_log_file_receives_module_records(self, package_logger, tmp_path):
        path = tmp_path / "run.log"
        setup_logging(level=logging.INFO, log_file=str(path))

        logging.getLogger("beliefgraph.simulation.engine").warning("guard tripped")
        for handler in package_logger.handlers:
            handler.flush()

        text = path.read_text(encoding="utf-8")
        assert "beliefgraph.simulation.engine - WARNING - guard tripped" in text
