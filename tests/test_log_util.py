import logging

import pytest

from arcball.utils.log_util import level_from_name, log_io


@log_io(mask=("secret",))
def _add(a, b, secret=None):
    return a + b


@log_io()
def _fail():
    raise RuntimeError("boom")


def test_log_io_logs_entry_and_exit(caplog):
    caplog.set_level(logging.DEBUG, logger="arcball")
    assert _add(1, 2, secret="hunter2") == 3

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("-> ") and "a=1" in m and "b=2" in m for m in messages)
    assert any(m.startswith("<- ") and m.endswith("= 3") for m in messages)
    assert not any("hunter2" in m for m in messages)


def test_log_io_reraises_and_logs_exception(caplog):
    caplog.set_level(logging.DEBUG, logger="arcball")
    with pytest.raises(RuntimeError):
        _fail()
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_log_io_silent_above_debug(caplog):
    caplog.set_level(logging.INFO, logger="arcball")
    _add(1, 1)
    assert caplog.records == []


@pytest.mark.parametrize("value, expected", [
    ("debug", logging.DEBUG),
    (" WARNING ", logging.WARNING),
    ("20", 20),
    (logging.ERROR, logging.ERROR),
    ("loud", logging.INFO),
    (None, logging.INFO),
])
def test_level_from_name(value, expected):
    assert level_from_name(value) == expected
