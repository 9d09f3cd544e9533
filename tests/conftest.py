import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; drop its handlers after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
