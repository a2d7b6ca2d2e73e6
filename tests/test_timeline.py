from datetime import timedelta

import pytest

from grimoire.timeline import Layer, Timeline


def ms(n):
    return timedelta(milliseconds=n)


def test_keyframes_fire_in_order():
    fired = []
    layer = Layer("main")
    layer.add_keyframe(ms(10), lambda: fired.append("late"))
    layer.add_keyframe(ms(0), lambda: fired.append("start"))
    layer.add_keyframe(ms(5), lambda: fired.append("middle"))
    timeline = Timeline(ms(20))
    timeline.add_layer(layer)
    timeline.play()
    assert timeline.wait(5) is True
    assert fired == ["start", "middle", "late"]


def test_keyframe_past_duration_never_fires():
    fired = []
    layer = Layer("main")
    layer.add_keyframe(ms(2), lambda: fired.append("in"))
    layer.add_keyframe(ms(50), lambda: fired.append("out"))
    timeline = Timeline(ms(5))
    timeline.add_layer(layer)
    timeline.play()
    assert timeline.wait(5) is True
    assert fired == ["in"]


def test_multiple_layers_fire():
    fired = []
    first, second = Layer("a"), Layer("b")
    first.add_keyframe(ms(1), lambda: fired.append("a"))
    second.add_keyframe(ms(1), lambda: fired.append("b"))
    timeline = Timeline(ms(3))
    timeline.add_layer(first)
    timeline.add_layer(second)
    timeline.play()
    assert timeline.wait(5) is True
    assert sorted(fired) == ["a", "b"]


def test_add_keyframe_keeps_first_and_clear_removes():
    layer = Layer("main")
    first = lambda: None  # noqa: E731
    second = lambda: None  # noqa: E731
    layer.add_keyframe(ms(1), first)
    layer.add_keyframe(ms(1), second)
    assert layer.keys == {ms(1): first}
    layer.clear_keyframe(ms(1))
    layer.clear_keyframe(ms(2))
    assert layer.keys == {}


def test_play_without_layers_raises():
    timeline = Timeline(ms(5))
    with pytest.raises(ValueError):
        timeline.play()
    assert timeline.wait(0) is False


def test_play_twice_raises():
    timeline = Timeline(ms(1))
    timeline.add_layer(Layer("main"))
    timeline.play()
    with pytest.raises(RuntimeError):
        timeline.play()
    assert timeline.wait(5) is True


def test_clear_layer():
    fired = []
    timeline = Timeline(ms(2))
    kept = Layer("kept")
    kept.add_keyframe(ms(0), lambda: fired.append("kept"))
    dropped = Layer("dropped")
    dropped.add_keyframe(ms(0), lambda: fired.append("dropped"))
    timeline.add_layer(dropped)
    timeline.add_layer(kept)
    timeline.clear_layer(0)
    with pytest.raises(IndexError):
        timeline.clear_layer(1)
    with pytest.raises(IndexError):
        timeline.clear_layer(-1)
    timeline.play()
    assert timeline.wait(5) is True
    assert fired == ["kept"]