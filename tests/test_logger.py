import logging

from playbook.logging.logger import setup_logger


def test_setup_logger_writes_rotating_file(tmp_path):
    log_file = tmp_path / "nested" / "engine.log"

    logger = setup_logger("playbook.test.file", log_file=log_file, level="DEBUG", console=False)
    logger.debug("levels projected")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert "levels projected" in log_file.read_text()
    assert " - playbook.test.file - DEBUG - " in log_file.read_text()


def test_setup_logger_does_not_duplicate_handlers(tmp_path):
    first = setup_logger("playbook.test.console", file=False)
    second = setup_logger("playbook.test.console", file=False, level=logging.WARNING)

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING


def test_unknown_level_name_falls_back_to_info():
    logger = setup_logger("playbook.test.level", level="chatty", file=False)

    assert logger.level == logging.INFO
