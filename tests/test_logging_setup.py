import logging
from pathlib import Path

from diagnostics.logging_setup import APP_LOGGER_NAME, configure_logging, get_logger


def test_configure_logging_writes_kv_lines(tmp_path: Path) -> None:
    info = configure_logging(tmp_path, level=logging.DEBUG)
    assert info["logger_name"] == f"{APP_LOGGER_NAME}.test"
    assert info["level"] == "DEBUG"

    logger = logging.getLogger(info["logger_name"])
    logger.debug("scanned %d roots", 3)
    for handler in logger.handlers:
        handler.flush()

    text = Path(info["log_path"]).read_text(encoding="utf-8")
    assert "level=DEBUG" in text
    assert "msg=scanned 3 roots" in text

    # a second call doesn't stack handlers
    configure_logging(tmp_path)
    assert len(logger.handlers) == 1
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_names() -> None:
    assert get_logger().name == APP_LOGGER_NAME
    assert get_logger("scanner").name == f"{APP_LOGGER_NAME}.scanner"
