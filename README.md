# vosutils

Small building blocks for firmware-style Python programs. They have no
dependencies outside the standard library. They are meant for code that runs
a cooperative loop and polls hardware, real or simulated, through plain
callables.

## Installation

```
pip install vosutils
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "vosutils[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `vosutils.crc` | CRC-16/Modbus: `crc16_update(crc, data)` for one byte, `crc16_update_bytes(crc, data)` for a byte sequence |
| `vosutils.ring_queue` | `RingQueue(capacity, unit_bytes=1)`, a fixed-capacity ring buffer of fixed-size units, with `add`, `get`, `peek`, `advance_rd`, `advance_wr` |
| `vosutils.dlist` | `CircularList` and `ListNode`, a circular doubly linked list with a sentinel head. A node can be removed while the list is being iterated |
| `vosutils.string_hash` | `StringHashTable(table_size)`, buckets selected by 32-bit FNV-1a (`fnv1a_index`). `find` and `delete` raise `KeyError` for a missing key |
| `vosutils.h_tree` | `TreeNode`, an ordered tree with `add_child`, `remove_child`, `destroy`, `iter_dfs`, `iter_bfs` and `root` |
| `vosutils.qfsm` | `Fsm`, `Event`, `Signal`, `EventResult`, a flat state machine that sends entry and exit signals on transitions |
| `vosutils.button` | `Button`, `ButtonConfig`, `ButtonEvent`, `ButtonLevel`, `ButtonEventData`: a debounced button that reports single, double, multi and long clicks |
| `vosutils.log` | `SysLog` and `LogLevel`: a buffered logger with per-module masks and a minimum level |
| `vosutils.simple_shell` | `Shell`, `ShellCommand`, `parse_command`: an echoing line shell with history, tab completion and the built-in commands `list`, `clear` and `history` |
| `vosutils.stimer` | `Scheduler`, a tick-driven scheduler for periodic tasks and up to 16 pending one-shot tasks |
| `vosutils.soft_iic` | `SoftI2C` and `I2CError`, a bit-banged I2C master driven through line callbacks |
| `vosutils.bus` | `CanFrame` and `I2CMessage` |
| `vosutils.modbus` | Modbus function and error codes, register-range checks, byte helpers and `SerialDirection` |

## Examples

### CRC-16/Modbus

```python
from vosutils.crc import crc16_update_bytes

crc = crc16_update_bytes(0xFFFF, b"123456789")
assert crc == 0x4B37
```

### Ring queue

```python
from vosutils.ring_queue import RingQueue

q = RingQueue(capacity=8, unit_bytes=1)
q.add(b"hello")
print(q.peek(2))   # b"he"
print(q.get(5))    # b"hello"
print(q.is_empty())
```

### State machine

A state is a function `(fsm, event) -> EventResult`. To change state, return
`fsm.transition(target)`.

```python
from vosutils.qfsm import Event, EventResult, Fsm, Signal

def off(fsm, event):
    if event.sig == Signal.APP_EVENT_TIMEOUT:
        return fsm.transition(on)
    return EventResult.IGNORED

def on(fsm, event):
    return EventResult.HANDLED

machine = Fsm(off, Event(Signal.EMPTY))
machine.dispatch(Event(Signal.APP_EVENT_TIMEOUT))
assert machine.state is on
```

### Logging

Lines are queued by `log` and written out by `task`. A line is written only if
its module's bit is set in `module_mask`.

```python
from vosutils.log import LogLevel, SysLog

lines = []
syslog = SysLog(lines.append, period_ms=10)
net = syslog.allocate_mask("net")
syslog.log(net, LogLevel.WARN, 42, "link down")
syslog.task()
print(lines[0])   # b"[WARN ] [net       ] [42  ] : link down"
```

### Scheduler

Time advances only when `tick` is called. `dispatch` then does one scheduling
step. `run(n)` starts the scheduler and does both `n` times.

```python
from vosutils.stimer import Scheduler

sched = Scheduler()
sched.create_task(lambda: print("tick"), period_ms=10, init=None)
sched.start()
sched.defer(lambda: print("once"), 25)
sched.run(100)   # drives 100 one-millisecond ticks
```

### Shell

`read(limit)` returns the bytes received so far and `write(data)` sends bytes
to the terminal. Typed characters are echoed at once. Command output is
queued, and each `dispatch` sends at most one queued message.

```python
from vosutils.simple_shell import Shell

incoming = bytearray(b"hello\r")
out = bytearray()

def read(limit):
    chunk = bytes(incoming[:limit])
    del incoming[:limit]
    return chunk

shell = Shell(read, out.extend, welcome=None)
shell.register("hello", lambda argv: b"hi\r\n", "say hi")
shell.dispatch()   # echoes the input and sends the welcome banner
shell.dispatch()   # sends the command's output and a new prompt
print(out.decode())
```

### Software I2C

```python
from vosutils.soft_iic import I2CError, SoftI2C

i2c = SoftI2C(scl_out=set_scl, sda_out=set_sda, sda_in=read_sda, delay=None)
try:
    i2c.write_one_byte(0x50, 0x00, 0xAB)
    data = i2c.read_bytes(0x50, 0x00, 4)
except I2CError:
    print("no acknowledge")
```

## What this package does not do

- It does not access hardware. Pins, serial lines and timers are whatever
  callables you pass in.
- `vosutils.modbus` provides only constants and field checks. It has no Modbus
  master or slave that builds, sends or parses frames.
- `Scheduler` has no clock of its own. It runs only as fast as you call `tick`
  and `dispatch`.
- There is no command-line program. Everything is used as a library.