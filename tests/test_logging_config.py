import logging

import pytest

from nurbsobj import Curve, curve_read_obj
from nurbsobj.logging_config import setup_logging


@pytest.fixture
def restore_package_logger():
    logger = logging.getLogger("nurbsobj")
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)


def test_console_and_file_handlers(tmp_path, restore_package_logger):
    log_file = tmp_path / "nurbsobj.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))

    assert logger is restore_package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logging.getLogger("nurbsobj.io.obj").info("hello from the codec")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "nurbsobj.io.obj - INFO - hello from the codec" in text


def test_repeated_setup_does_not_duplicate_handlers(restore_package_logger):
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_debug_log_records_decoding(tmp_path, restore_package_logger):
    log_file = tmp_path / "nurbsobj.log"
    obj_file = tmp_path / "segment.obj"
    obj_file.write_text(
        "# exported\nv 0 0 0\nv 1 0 0\ncstype bspline\ndeg 1\ncurv 0 1 1 2\nparm u 0 0 1 1\nend\n",
        encoding="utf-8",
    )
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    curve_read_obj(obj_file, Curve())
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Ignoring '#' on line 1." in text
    assert "Decoded curve" in text
