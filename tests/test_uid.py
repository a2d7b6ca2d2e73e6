import string

import pytest

from grimoire import uid


@pytest.mark.parametrize("length", [4, 8, 16])
def test_new_uid_length_and_charset(length):
    value = uid.new_uid(length)
    assert len(value) == length
    assert set(value) <= set(uid.ALPHA_NUMERIC)


@pytest.mark.parametrize("length,count", [(8, 20000), (16, 20000)])
def test_new_uid_no_collisions(length, count):
    seen = {uid.new_uid(length) for _ in range(count)}
    assert len(seen) == count


def test_new_default_length():
    value = uid.new()
    assert len(value) == 16
    assert value.isalnum()


def test_new_uid_src_numeric():
    value = uid.new_uid_src(4, uid.NUMERIC)
    assert len(value) == 4
    assert value.isdigit()


def test_new_uid_src_single_char_set():
    assert uid.new_uid_src(5, "x") == "xxxxx"


def test_new_uid_zero_length():
    assert uid.new_uid(0) == ""


def test_new_uid_negative_length():
    with pytest.raises(ValueError):
        uid.new_uid(-1)


def test_new_uid_src_empty_set():
    with pytest.raises(ValueError):
        uid.new_uid_src(3, "")


def test_new_secure_512_is_hex_of_64_bytes():
    value = uid.new_secure_512()
    assert len(value) == 128
    assert set(value) <= set(string.hexdigits.lower())
    assert uid.new_secure_512() != value