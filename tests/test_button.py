import pytest

from vosutils.button import (
    Button,
    ButtonConfig,
    ButtonEvent,
    ButtonEventData,
    ButtonLevel,
)


def _run(levels, active=ButtonLevel.HIGH, long_min=50, up_max=3):
    feed = iter(levels)
    events = []
    config = ButtonConfig(
        io_read=lambda: next(feed),
        long_min_cnt=long_min,
        up_max_cnt=up_max,
        active_level=active,
    )
    button = Button(config, events.append)
    returned = [button.scan() for _ in levels]
    return events, [r for r in returned if r is not None]


def test_single_click():
    events, returned = _run([1] * 3 + [0] * 10)
    assert events == [ButtonEventData(ButtonEvent.SINGLE_CLICK, 1)]
    assert returned == events


def test_double_click():
    events, _ = _run([1] * 3 + [0] * 2 + [1] * 3 + [0] * 10)
    assert events == [ButtonEventData(ButtonEvent.DOUBLE_CLICK, 2)]


def test_triple_click_is_more_click():
    levels = [1] * 3 + [0] * 2 + [1] * 3 + [0] * 2 + [1] * 3 + [0] * 10
    events, _ = _run(levels)
    assert events == [ButtonEventData(ButtonEvent.MORE_CLICK, 3)]


def test_long_press_reported_once():
    events, _ = _run([1] * 20 + [0] * 10, long_min=5)
    assert events == [ButtonEventData(ButtonEvent.LONG_CLICK, 1)]


def test_active_low_single_click():
    events, _ = _run([0] * 3 + [1] * 10, active=ButtonLevel.LOW)
    assert events == [ButtonEventData(ButtonEvent.SINGLE_CLICK, 1)]


def test_single_glitch_is_filtered():
    events, returned = _run([0, 0, 1, 0, 0, 0, 0, 0, 0])
    assert events == []
    assert returned == []


def test_two_separate_clicks():
    levels = ([1] * 3 + [0] * 10) * 2
    events, _ = _run(levels)
    assert events == [ButtonEventData(ButtonEvent.SINGLE_CLICK, 1)] * 2


def test_works_without_callback():
    feed = iter([1] * 3 + [0] * 10)
    config = ButtonConfig(lambda: next(feed), 50, 3, ButtonLevel.HIGH)
    button = Button(config)
    results = [button.scan() for _ in range(13)]
    reported = [r for r in results if r is not None]
    assert [r.ev_type for r in reported] == [ButtonEvent.SINGLE_CLICK]


def test_missing_reader_rejected():
    with pytest.raises(ValueError):
        Button(ButtonConfig(None, 10, 3))