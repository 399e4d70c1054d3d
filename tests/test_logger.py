import logging

import pytest

from invoice_fields.utils.logger import (
    LOGGER_NAMESPACE,
    ColoredFormatter,
    get_logger,
    set_level,
    setup_logger,
    setup_logger_from_config,
)


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAMESPACE)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_module_loggers_share_namespace():
    assert get_logger("invoice_fields.engine").name == "invoice_fields.engine"
    assert get_logger("invoice_fields").name == "invoice_fields"
    assert get_logger("main").name == f"{LOGGER_NAMESPACE}.main"
    assert get_logger("invoice_fieldsx").name == f"{LOGGER_NAMESPACE}.invoice_fieldsx"


def test_setup_logger_console_and_file(tmp_path, package_logger):
    log_file = tmp_path / "logs" / "run.log"
    logger = setup_logger(level="DEBUG", log_file=str(log_file), colorize=False)

    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    get_logger(__name__).debug("written to file")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_set_level_updates_handlers(package_logger):
    setup_logger(level="INFO")
    set_level("WARNING")
    assert package_logger.level == logging.WARNING
    assert all(h.level == logging.WARNING for h in package_logger.handlers)


def test_setup_from_config(package_logger):
    setup_logger_from_config()
    assert package_logger.level == logging.INFO
    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0].formatter, ColoredFormatter)


def test_colored_formatter():
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)
    formatted = ColoredFormatter("%(message)s").format(record)
    assert "careful" in formatted
    assert formatted.endswith(ColoredFormatter.RESET)
