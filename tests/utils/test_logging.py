import logging
from puml_ld.utils.logging import setup_logger


def test_console_only_by_default():
    logger = setup_logger("puml_ld.test.console")
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]


def test_file_handler_when_log_dir_given(tmp_path):
    logger = setup_logger("puml_ld.test.file", level="DEBUG", log_dir=tmp_path / "logs")
    logger.debug("hello")

    assert logger.level == logging.DEBUG
    assert (tmp_path / "logs" / "puml_ld.log").exists()
    for handler in logger.handlers:
        handler.close()


def test_handlers_are_not_duplicated():
    first = setup_logger("puml_ld.test.once")
    second = setup_logger("puml_ld.test.once")
    assert first is second
    assert len(second.handlers) == 1
