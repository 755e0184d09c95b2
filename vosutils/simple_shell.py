"""Line-oriented interactive shell driven by byte-level read and write functions."""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from vosutils.ring_queue import RingQueue

HISTORY_SIZE = 10
CMD_MAX = 64
CMD_MAX_ARGS = 4
MAX_COMMANDS = 16
MAX_OUT_LEN = 512

RX_QUEUE_SIZE = CMD_MAX * 2
TX_QUEUE_SIZE = MAX_OUT_LEN

NEW_LINE = b"\r\n"
MAIN_NAME = b"VirtualOS"
PROMPT = MAIN_NAME + b"@admin" + NEW_LINE + b"$ "
NEW_LINE_PROMPT = NEW_LINE + PROMPT
WELCOME = b"Welcome to Simple Shell" + NEW_LINE
TIPS = b"You can type `list` to get all available commands." + NEW_LINE + NEW_LINE + PROMPT
DEFAULT_MSG = WELCOME + TIPS

_NOT_FOUND = b"command not found\r\n"
_TOO_LONG = b"\r\n!command too long!\r\n"
_BACKSPACE_SEQ = b"\b \b"
_CLEAR_SCREEN = b"\x1b[2J\x1b[H"
_REWRITE_BUF_SIZE = CMD_MAX * 4
_OUT_LIMIT = MAX_OUT_LEN - len(NEW_LINE)

_LEN_HEADER = struct.Struct("<I")

CommandOutput = Union[str, bytes, bytearray, None]
CommandCallback = Callable[[list], CommandOutput]


@dataclass(frozen=True)
class ShellCommand:
    """A named command, its handler and a one-line description."""

    name: str
    callback: CommandCallback
    description: str = ""


def parse_command(line: str) -> list[str]:
    """Split a command line into arguments.

    Spaces separate arguments, double quotes group them, and ``\\n`` and ``\\t``
    escapes are expanded. At most three arguments are produced; the third takes
    the rest of the line verbatim.
    """
    args: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    limit = CMD_MAX_ARGS - 1
    while i < n and len(args) < limit:
        if not in_quotes:
            while i < n and line[i] == " ":
                i += 1
        if i >= n:
            break
        if line[i] == '"':
            in_quotes = not in_quotes
            i += 1
            continue
        if len(args) + 1 >= limit:
            args.append(line[i:])
            break
        arg: list[str] = []
        while i < n:
            ch = line[i]
            if ch == "\\" and i + 1 < n and line[i + 1] in "nt":
                arg.append("\n" if line[i + 1] == "n" else "\t")
                i += 2
                continue
            if ch == '"':
                in_quotes = not in_quotes
                i += 1
                break
            if not in_quotes and ch == " ":
                i += 1
                break
            arg.append(ch)
            i += 1
        args.append("".join(arg))
    return args


def _to_bytes(output: CommandOutput) -> bytes:
    if output is None:
        return b""
    if isinstance(output, str):
        return output.encode("utf-8")
    return bytes(output)


def _finish_block(out: bytearray, limit: int) -> bytes:
    if len(out) + 2 <= limit:
        out += b"\r\n"
    elif len(out) + 1 <= limit:
        out += b"\r"
    return bytes(out)


class Shell:
    """An echoing shell with history, tab completion and built-in commands.

    ``read(max_len)`` returns the bytes received so far and ``write(data)``
    sends bytes to the terminal. Call :meth:`dispatch` periodically.
    """

    def __init__(
        self,
        read: Callable[[int], Optional[bytes]],
        write: Callable[[bytes], object],
        welcome: Optional[str] = None,
    ) -> None:
        if not callable(read) or not callable(write):
            raise ValueError("read and write must be callable")
        self._read = read
        self._write = write
        self._rx = RingQueue(RX_QUEUE_SIZE)
        self._tx = RingQueue(TX_QUEUE_SIZE)
        self._cmd = bytearray()
        self._history: list[str] = []
        self._history_index = -1
        self._commands: dict[str, ShellCommand] = {}
        self._sorted = False

        self.register("list", self._cmd_list, "show all available commands")
        self.register("clear", self._cmd_clear, "clear the screen")
        self.register("history", self._cmd_history, "show command history")

        if welcome is None:
            self._add_msg(DEFAULT_MSG)
        else:
            self._add_msg(welcome.encode("utf-8") + TIPS)

    def register(self, name: str, callback: CommandCallback, description: str = "") -> ShellCommand:
        """Add a command, or replace the one of the same name."""
        if not isinstance(name, str) or not name:
            raise ValueError("command name must be a non-empty string")
        if not callable(callback):
            raise ValueError("command callback must be callable")
        if name not in self._commands and len(self._commands) >= MAX_COMMANDS:
            raise ValueError(f"at most {MAX_COMMANDS} commands can be registered")
        command = ShellCommand(name, callback, description or "")
        self._commands[name] = command
        return command

    def history(self) -> list[str]:
        """Previously entered command lines, oldest first."""
        return list(self._history)

    def dispatch(self) -> None:
        """Read pending input, handle it, and flush one queued output message."""
        if not self._sorted:
            self._commands = dict(sorted(self._commands.items()))
            self._sorted = True
        data = self._read(RX_QUEUE_SIZE)
        if data:
            self._rx.add(bytes(data)[:RX_QUEUE_SIZE])
        self._parse_input()
        self._flush_tx()

    # output queue

    def _add_msg(self, msg: bytes) -> None:
        if not msg:
            return
        if self._tx.add(_LEN_HEADER.pack(len(msg))) != _LEN_HEADER.size:
            return
        self._tx.add(msg)

    def _flush_tx(self) -> None:
        header = self._tx.get(_LEN_HEADER.size)
        if len(header) != _LEN_HEADER.size:
            return
        (length,) = _LEN_HEADER.unpack(header)
        if length == 0 or length > TX_QUEUE_SIZE:
            return
        data = self._tx.get(length)
        if len(data) != length:
            return
        self._write(data)

    # input handling

    def _parse_input(self) -> None:
        while not self._rx.is_empty():
            chunk = self._rx.get(1)
            if len(chunk) != 1:
                break
            ch = chunk[0]
            if ch in (0x0D, 0x0A):
                self._handle_newline()
            elif ch in (0x08, 0x7F):
                self._handle_backspace()
            elif ch == 0x1B:
                first = self._rx.get(1)
                if not first:
                    continue
                second = self._rx.get(1)
                if not second or first != b"[":
                    continue
                if second == b"A":
                    self._handle_up_arrow()
                elif second == b"B":
                    self._handle_down_arrow()
            elif ch == 0x09:
                self._handle_tab()
            else:
                self._handle_regular(ch)

    def _add_to_history(self, line: str) -> None:
        if not line:
            return
        self._history.append(line[: CMD_MAX - 1])
        if len(self._history) > HISTORY_SIZE:
            del self._history[0]
        self._history_index = -1

    def _process(self, line: str) -> bytes:
        argv = parse_command(line)
        if not argv:
            return b""
        command = self._commands.get(argv[0])
        if command is None:
            return _NOT_FOUND
        return _to_bytes(command.callback(argv))[:_OUT_LIMIT]

    def _handle_newline(self) -> None:
        output = b""
        if self._cmd:
            line = self._cmd.decode("latin-1")
            self._add_to_history(line)
            output = self._process(line)
            self._cmd.clear()
        self._history_index = -1
        self._add_msg((NEW_LINE + output + NEW_LINE_PROMPT)[:MAX_OUT_LEN])

    def _handle_backspace(self) -> None:
        if self._cmd:
            self._write(_BACKSPACE_SEQ)
            del self._cmd[-1]

    def _rewrite_cmdline(self, del_cnt: int, new_cmd: bytes) -> None:
        if not new_cmd:
            return
        erase = min(del_cnt, _REWRITE_BUF_SIZE // 3)
        out = _BACKSPACE_SEQ * erase
        if len(out) + len(new_cmd) <= _REWRITE_BUF_SIZE:
            out += new_cmd
        self._write(out)

    def _load_history_entry(self) -> None:
        del_cnt = len(self._cmd)
        self._cmd = bytearray(self._history[self._history_index].encode("latin-1")[: CMD_MAX - 1])
        self._rewrite_cmdline(del_cnt, bytes(self._cmd))

    def _handle_up_arrow(self) -> None:
        if not self._history:
            return
        if self._history_index == -1:
            self._history_index = len(self._history) - 1
        elif self._history_index > 0:
            self._history_index -= 1
        self._load_history_entry()

    def _handle_down_arrow(self) -> None:
        if self._history_index == -1 or not self._history:
            return
        self._history_index += 1
        if self._history_index >= len(self._history):
            self._history_index = -1
            self._rewrite_cmdline(len(self._cmd), b"")
            self._cmd.clear()
        else:
            self._load_history_entry()

    def _handle_tab(self) -> None:
        if not self._cmd:
            return
        prefix = bytes(self._cmd)
        matches = [
            name.encode("utf-8")
            for name in self._commands
            if name.encode("utf-8").startswith(prefix)
        ]
        if not matches:
            return
        if len(matches) == 1:
            name = matches[0]
            if len(name) >= CMD_MAX:
                return
            self._cmd = bytearray(name)
            suffix = name[len(prefix):]
            if suffix:
                self._write(suffix)
            return
        out = bytearray(NEW_LINE)
        for position, name in enumerate(matches):
            if len(out) + len(name) + 1 > TX_QUEUE_SIZE:
                break
            out += name
            if position < len(matches) - 1:
                out += b" "
        out += NEW_LINE + NEW_LINE_PROMPT + self._cmd
        self._write(bytes(out))

    def _handle_regular(self, ch: int) -> None:
        if len(self._cmd) < CMD_MAX - 1:
            self._cmd.append(ch)
            self._write(bytes((ch,)))
        else:
            self._write(_TOO_LONG)
            self._cmd.clear()

    # built-in commands

    def _cmd_list(self, argv: Sequence[str]) -> bytes:
        limit = _OUT_LIMIT
        out = bytearray(b"Available commands:\r\n"[:limit])
        for command in self._commands.values():
            available = limit - len(out)
            if available <= 0:
                break
            line = f"  {command.name:<20} - {command.description}\r\n".encode("utf-8")
            if len(line) > available:
                break
            out += line
        return _finish_block(out, limit)

    def _cmd_clear(self, argv: Sequence[str]) -> bytes:
        if len(_CLEAR_SCREEN) < _OUT_LIMIT:
            return _CLEAR_SCREEN
        return b""

    def _cmd_history(self, argv: Sequence[str]) -> bytes:
        limit = _OUT_LIMIT
        out = bytearray(b"Command history:\r\n"[:limit])
        for number, entry in enumerate(self._history, start=1):
            available = limit - len(out)
            if available <= 0:
                break
            line = b"  %d: %s\r\n" % (number, entry.encode("latin-1"))
            if len(line) > available:
                break
            out += line
        return _finish_block(out, limit)