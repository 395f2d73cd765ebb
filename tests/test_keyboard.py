import os
import termios
import time

import pytest

from lifestag.keyboard import Keyboard


@pytest.fixture
def terminal():
    master, slave = os.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


def _wait_for_key(keyboard, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if keyboard.keyhit():
            return True
        time.sleep(0.01)
    return False


def test_init_disables_echo_and_canonical_mode(terminal):
    _, slave = terminal
    with Keyboard(slave):
        lflag = termios.tcgetattr(slave)[3]
        assert lflag & termios.ECHO == 0
        assert lflag & termios.ICANON == 0
        assert lflag & termios.ISIG == 0


def test_destroy_restores_settings(terminal):
    _, slave = terminal
    original = termios.tcgetattr(slave)
    with Keyboard(slave):
        pass
    assert termios.tcgetattr(slave)[3] == original[3]


def test_keyhit_without_input_is_false(terminal):
    _, slave = terminal
    with Keyboard(slave) as keyboard:
        assert keyboard.keyhit() is False


def test_keyhit_then_readch_returns_key(terminal):
    master, slave = terminal
    with Keyboard(slave) as keyboard:
        os.write(master, b"a")
        assert _wait_for_key(keyboard) is True
        assert keyboard.keyhit() is True
        assert keyboard.readch() == "a"
        assert keyboard.keyhit() is False


def test_readch_blocks_for_key(terminal):
    master, slave = terminal
    with Keyboard(slave) as keyboard:
        os.write(master, b"d")
        assert keyboard.readch() == "d"


def test_keyhit_requires_init(terminal):
    _, slave = terminal
    with pytest.raises(RuntimeError):
        Keyboard(slave).keyhit()


def test_init_on_non_terminal_fails():
    read_end, write_end = os.pipe()
    try:
        with pytest.raises(termios.error):
            Keyboard(read_end).init()
    finally:
        os.close(read_end)
        os.close(write_end)


def test_readch_at_end_of_input_raises():
    read_end, write_end = os.pipe()
    os.close(write_end)
    try:
        with pytest.raises(EOFError):
            Keyboard(read_end).readch()
    finally:
        os.close(read_end)