import io
import os
import tempfile
from unittest import mock

from xztools.term import is_terminal


def test_pipe_is_not_terminal():
    r, w = os.pipe()
    try:
        assert is_terminal(r) is False
        assert is_terminal(w) is False
    finally:
        os.close(r)
        os.close(w)


def test_regular_file_is_not_terminal():
    with tempfile.TemporaryFile() as f:
        assert is_terminal(f) is False
        assert is_terminal(f.fileno()) is False


def test_closed_descriptor_is_not_terminal():
    r, w = os.pipe()
    os.close(r)
    os.close(w)
    assert is_terminal(r) is False


def test_object_without_descriptor_is_not_terminal():
    assert is_terminal(io.BytesIO(b"data")) is False


def test_terminal_reported_by_os():
    with mock.patch("os.isatty", return_value=True) as isatty:
        assert is_terminal(5) is True
        isatty.assert_called_once_with(5)


def test_file_object_descriptor_is_used():
    with tempfile.TemporaryFile() as f:
        with mock.patch("os.isatty", return_value=True) as isatty:
            assert is_terminal(f) is True
            isatty.assert_called_once_with(f.fileno())