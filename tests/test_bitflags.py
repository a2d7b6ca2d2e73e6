import pytest

from grimoire.bitflags import Bit

FLAGS = [1, 2, 4, 8, 1 << 31]


@pytest.mark.parametrize("flag", FLAGS)
def test_set_then_has(flag):
    bits = Bit()
    assert not bits.has(flag)
    bits.set(flag)
    assert bits.has(flag)


@pytest.mark.parametrize("flag", FLAGS)
def test_clear_removes_only_that_flag(flag):
    bits = Bit()
    for f in FLAGS:
        bits.set(f)
    bits.clear(flag)
    assert not bits.has(flag)
    for other in FLAGS:
        if other != flag:
            assert bits.has(other)


@pytest.mark.parametrize("start", [0, 5, 0xFFFFFFFF])
def test_toggle_twice_restores(start):
    bits = Bit(start)
    bits.toggle(6)
    bits.toggle(6)
    assert bits.value == start


def test_toggle_flips():
    bits = Bit()
    bits.toggle(4)
    assert bits.has(4)
    bits.toggle(4)
    assert not bits.has(4)


def test_set_is_idempotent():
    bits = Bit()
    bits.set(2)
    once = int(bits)
    bits.set(2)
    assert int(bits) == once


def test_value_stays_within_32_bits():
    bits = Bit(1 << 40)
    assert bits.value == 0
    bits.set(1 << 33)
    assert bits.value == 0
    bits.toggle(0xFFFFFFFF)
    assert bits.value == 0xFFFFFFFF


def test_has_with_zero_flag_is_false():
    assert not Bit(0xFFFFFFFF).has(0)