from collections import deque

import pytest

from vosutils.simple_shell import (
    CMD_MAX,
    DEFAULT_MSG,
    HISTORY_SIZE,
    MAX_COMMANDS,
    NEW_LINE_PROMPT,
    TIPS,
    Shell,
    ShellCommand,
    parse_command,
)


class Terminal:
    def __init__(self):
        self.pending = deque()
        self.written = []

    def read(self, max_len):
        if self.pending:
            return self.pending.popleft()
        return b""

    def write(self, data):
        self.written.append(bytes(data))
        return len(data)

    def take(self):
        out = b"".join(self.written)
        self.written.clear()
        return out


def make_shell(welcome=None):
    term = Terminal()
    shell = Shell(term.read, term.write, welcome)
    shell.dispatch()
    term.take()
    return shell, term


def feed(shell, term, data=b""):
    if data:
        term.pending.append(data)
    shell.dispatch()
    return term.take()


def test_parse_simple_words():
    assert parse_command("a b") == ["a", "b"]


def test_parse_quoted_argument():
    assert parse_command('echo "hello world"') == ["echo", "hello world"]


def test_parse_last_argument_keeps_rest_of_line():
    assert parse_command("a b c d") == ["a", "b", "c d"]


def test_parse_escapes():
    assert parse_command("x a\\nb") == ["x", "a\nb"]
    assert parse_command("x a\\tb") == ["x", "a\tb"]


@pytest.mark.parametrize("line", ["", "    ", '""'])
def test_parse_empty(line):
    assert parse_command(line) == []


def test_default_welcome_flushed_on_first_dispatch():
    term = Terminal()
    shell = Shell(term.read, term.write)
    shell.dispatch()
    assert term.take() == DEFAULT_MSG


def test_custom_welcome():
    term = Terminal()
    shell = Shell(term.read, term.write, "Hi\r\n")
    shell.dispatch()
    assert term.take() == b"Hi\r\n" + TIPS


def test_init_requires_callables():
    with pytest.raises(ValueError):
        Shell(None, lambda data: None)


def test_regular_characters_are_echoed():
    shell, term = make_shell()
    assert feed(shell, term, b"abc") == b"abc"


def test_unknown_command():
    shell, term = make_shell()
    out = feed(shell, term, b"foo\r")
    assert out == b"foo" + b"\r\ncommand not found\r\n" + NEW_LINE_PROMPT


def test_registered_command_receives_argv():
    shell, term = make_shell()
    seen = []

    def echo(argv):
        seen.append(list(argv))
        return " ".join(argv[1:])

    shell.register("echo", echo, "print arguments")
    out = feed(shell, term, b"echo hi there\r")
    assert seen == [["echo", "hi", "there"]]
    assert out == b"echo hi there" + b"\r\nhi there" + NEW_LINE_PROMPT


def test_register_returns_command():
    shell, _ = make_shell()
    cmd = shell.register("noop", lambda argv: None, "nothing")
    assert cmd == ShellCommand("noop", cmd.callback, "nothing")


def test_empty_line_prints_prompt_only():
    shell, term = make_shell()
    assert feed(shell, term, b"\r") == b"\r\n" + NEW_LINE_PROMPT
    assert shell.history() == []


def test_one_message_flushed_per_dispatch():
    shell, term = make_shell()
    first = feed(shell, term, b"a\rb\r")
    assert first.count(b"command not found") == 1
    second = feed(shell, term)
    assert second.count(b"command not found") == 1


def test_backspace_edits_command():
    shell, term = make_shell()
    out = feed(shell, term, b"fx\x7f")
    assert out == b"fx\b \b"
    feed(shell, term, b"\r")
    assert shell.history() == ["f"]


def test_backspace_on_empty_line_writes_nothing():
    shell, term = make_shell()
    assert feed(shell, term, b"\x08") == b""


def test_history_keeps_latest_entries():
    shell, term = make_shell()
    for i in range(HISTORY_SIZE + 2):
        feed(shell, term, f"c{i}\r".encode())
    hist = shell.history()
    assert len(hist) == HISTORY_SIZE
    assert hist[0] == "c2"
    assert hist[-1] == f"c{HISTORY_SIZE + 1}"


def test_up_arrow_recalls_last_command():
    shell, term = make_shell()
    feed(shell, term, b"one\r")
    feed(shell, term, b"two\r")
    assert feed(shell, term, b"ab\x1b[A") == b"ab" + b"\b \b\b \b" + b"two"
    assert feed(shell, term, b"\x1b[A") == b"\b \b" * 3 + b"one"
    feed(shell, term, b"\r")
    assert shell.history() == ["one", "two", "one"]


def test_down_arrow_past_newest_clears_line():
    shell, term = make_shell()
    feed(shell, term, b"one\r")
    feed(shell, term, b"\x1b[A")
    assert feed(shell, term, b"\x1b[B") == b""
    out = feed(shell, term, b"\r")
    assert out == b"\r\n" + NEW_LINE_PROMPT
    assert shell.history() == ["one"]


def test_tab_completes_single_match():
    shell, term = make_shell()
    shell.register("status", lambda argv: "ok", "")
    assert feed(shell, term, b"sta\t") == b"sta" + b"tus"
    out = feed(shell, term, b"\r")
    assert out == b"\r\nok" + NEW_LINE_PROMPT
    assert shell.history() == ["status"]


def test_tab_without_match_writes_nothing():
    shell, term = make_shell()
    assert feed(shell, term, b"zz\t") == b"zz"


def test_command_too_long():
    shell, term = make_shell()
    out = feed(shell, term, b"x" * CMD_MAX)
    assert out == b"x" * (CMD_MAX - 1) + b"\r\n!command too long!\r\n"
    feed(shell, term, b"\r")
    assert shell.history() == []


def test_list_builtin_sorted():
    shell, term = make_shell()
    out = feed(shell, term, b"list\r")
    assert b"Available commands:\r\n" in out
    assert b"show all available commands" in out
    assert out.index(b"clear") < out.index(b"history") < out.index(b"  list")


def test_clear_builtin():
    shell, term = make_shell()
    out = feed(shell, term, b"clear\r")
    assert out == b"clear" + b"\r\n\x1b[2J\x1b[H" + NEW_LINE_PROMPT


def test_history_builtin():
    shell, term = make_shell()
    feed(shell, term, b"foo\r")
    out = feed(shell, term, b"history\r")
    assert b"Command history:\r\n  1: foo\r\n  2: history\r\n\r\n" in out


def test_register_limit():
    shell, _ = make_shell()
    for i in range(MAX_COMMANDS - 3):
        shell.register(f"cmd{i}", lambda argv: None, "")
    with pytest.raises(ValueError):
        shell.register("extra", lambda argv: None, "")


def test_register_replaces_existing():
    shell, term = make_shell()
    shell.register("list", lambda argv: "mine", "custom")
    out = feed(shell, term, b"list\r")
    assert out == b"list" + b"\r\nmine" + NEW_LINE_PROMPT


def test_register_rejects_empty_name():
    shell, _ = make_shell()
    with pytest.raises(ValueError):
        shell.register("", lambda argv: None, "")