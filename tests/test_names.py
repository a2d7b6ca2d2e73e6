from grimoire import names


def _check_tail(adjective, digits):
    assert adjective in names.ADJ
    assert len(digits) == 4
    assert digits.isdigit()


def test_new_name_shape():
    for _ in range(200):
        first, adjective, digits = names.new_name().split("_")
        assert first in names.NAMES
        _check_tail(adjective, digits)


def test_new_last_name_keeps_prefix():
    for _ in range(200):
        value = names.new_last_name("Server")
        prefix, adjective, digits = value.split("_")
        assert prefix == "Server"
        _check_tail(adjective, digits)


def test_new_last_name_with_empty_name():
    value = names.new_last_name("")
    assert value.startswith("_")
    _, adjective, digits = value.split("_")
    _check_tail(adjective, digits)


def test_new_name_draws_from_several_names():
    firsts = {names.new_name().split("_")[0] for _ in range(500)}
    assert len(firsts) > 1
    assert firsts <= set(names.NAMES)