"""
Tests for logging setup.
"""

import logging
import threading

import pytest

from label_print_panel.logging_config import APP_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_records_carry_thread_name(tmp_path):
    logger = setup_logging('DEBUG', log_dir=tmp_path, enable_file_logging=True)

    worker = threading.Thread(target=get_logger('channel').info, args=('from worker',),
                              name='sato-ws')
    worker.start()
    worker.join()
    for handler in logger.handlers:
        handler.flush()

    contents = (tmp_path / f'{APP_NAME}.log').read_text(encoding='utf-8')
    assert '[sato-ws] label_print_panel.channel - from worker' in contents
    assert logger.level == logging.DEBUG


def test_unknown_level_name_falls_back_to_info():
    assert setup_logging('CHATTY').level == logging.INFO


def test_get_logger_namespaces_names():
    assert get_logger('service').name == 'label_print_panel.service'
    assert get_logger('label_print_panel.app').name == 'label_print_panel.app'
