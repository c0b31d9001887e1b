import re

import pytest

from d2tables.log_backends import (
    ConsoleBackend,
    ConsoleTarget,
    LoggerBackend,
    LogLevel,
    level_label,
)


class _Collector(LoggerBackend):
    def __init__(self, *args):
        super().__init__(*args)
        self.written = []

    def write(self, message, level):
        self.written.append((message, level))


@pytest.mark.parametrize(
    "level,label",
    [
        (LogLevel.Emerg, "EMERG"),
        (LogLevel.Crit, "CRIT "),
        (LogLevel.Err, "ERROR"),
        (LogLevel.Warning, "WARNI"),
        (LogLevel.Info, "INFO "),
        (LogLevel.Debug, "DEBUG"),
        (42, "?????"),
    ],
)
def test_level_label(level, label):
    assert level_label(level) == label


def test_labels_are_five_chars():
    assert all(len(level_label(level)) == 5 for level in LogLevel)


def test_log_enabled_boundary():
    backend = ConsoleBackend(LogLevel.Warning, False, False, False, ConsoleTarget.COUT)
    assert backend.log_enabled(LogLevel.Warning)
    assert backend.log_enabled(LogLevel.Err)
    assert not backend.log_enabled(LogLevel.Notice)


def test_plain_message_unchanged(capsys):
    backend = ConsoleBackend(7, False, False, False, ConsoleTarget.COUT)
    backend.flush_message("hello", LogLevel.Info)
    assert capsys.readouterr().out == "hello\n"


def test_level_prefix_and_newline():
    backend = _Collector(7, True, False, False, True)
    backend.flush_message("boom", LogLevel.Err)
    assert backend.written == [(level_label(LogLevel.Err) + " boom\n", LogLevel.Err)]
    assert backend.written[0][0] == "ERROR boom\n"


def test_timestamp_prefix(capsys):
    backend = ConsoleBackend(7, False, True, False, ConsoleTarget.COUT)
    backend.flush_message("msg", LogLevel.Info)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1
    match = re.fullmatch(r"\[([^\]]+)\] (.*)", lines[0])
    assert match is not None
    assert match.group(2) == "msg"
    assert len(match.group(1)) > 0


def test_level_then_timestamp_order(capsys):
    backend = ConsoleBackend(7, True, True, False, ConsoleTarget.COUT)
    backend.flush_message("msg", LogLevel.Info)
    message = capsys.readouterr().out.rstrip("\n")
    assert message.startswith("INFO  [")
    assert message.endswith("] msg")


def test_time_offsets_prefix(capsys):
    backend = ConsoleBackend(7, False, False, True, ConsoleTarget.COUT)
    backend.flush_message("a", LogLevel.Info)
    backend.flush_message("b", LogLevel.Info)
    first, second = capsys.readouterr().out.splitlines()
    m1 = re.fullmatch(r"\[(\d+), \+(\d+)\] a", first)
    m2 = re.fullmatch(r"\[(\d+), \+(\d+)\] b", second)
    assert m1 and m2
    assert int(m2.group(1)) >= int(m1.group(1))
    assert int(m2.group(2)) <= int(m2.group(1))


def test_console_cout(capsys):
    backend = ConsoleBackend(7, True, False, False, ConsoleTarget.COUT)
    backend.flush_message("hi", LogLevel.Debug)
    out = capsys.readouterr()
    assert out.out == "DEBUG hi\n"
    assert out.err == ""


def test_console_cerr(capsys):
    backend = ConsoleBackend(7, False, False, False, ConsoleTarget.CERR)
    backend.flush_message("warn", LogLevel.Warning)
    out = capsys.readouterr()
    assert out.err == "warn\n"
    assert out.out == ""


def test_console_printf(capsys):
    backend = ConsoleBackend(7, False, False, False, ConsoleTarget.PRINTF)
    backend.flush_message("x", LogLevel.Info)
    assert capsys.readouterr().out == "x\n"