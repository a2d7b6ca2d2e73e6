import pytest

from grimoire.levels import Level, level_from_string


@pytest.mark.parametrize(
    "level,text",
    [
        (Level.TRACE, "TRACE"),
        (Level.DEBUG, "DEBUG"),
        (Level.INFO, "INFO"),
        (Level.WARN, "WARN"),
        (Level.ERROR, "ERROR"),
        (Level.FATAL, "FATAL"),
        (Level.NULL, "∅"),
    ],
)
def test_label(level, text):
    assert level.label() == text


@pytest.mark.parametrize(
    "text,level",
    [
        ("TRACE", Level.TRACE),
        ("DEBUG", Level.DEBUG),
        ("INFO ", Level.INFO),
        ("WARN ", Level.WARN),
        ("ERROR", Level.ERROR),
        ("FATAL", Level.FATAL),
    ],
)
def test_from_string(text, level):
    assert Level.from_string(text) is level
    assert level_from_string(text) is level


@pytest.mark.parametrize("text", ["", "bogus", "trace", "∅"])
def test_unknown_is_null(text):
    assert level_from_string(text) is Level.NULL


def test_unpadded_info_and_warn_are_not_recognised():
    assert level_from_string("INFO") is Level.NULL
    assert level_from_string("WARN") is Level.NULL


def test_round_trip_for_five_letter_labels():
    for level in (Level.TRACE, Level.DEBUG, Level.ERROR, Level.FATAL):
        assert level_from_string(level.label()) is level


def test_ordering_of_parsed_levels():
    parsed = [level_from_string(text) for text in ("FATAL", "TRACE", "ERROR", "DEBUG", "bogus")]
    assert sorted(parsed) == [Level.NULL, Level.TRACE, Level.DEBUG, Level.ERROR, Level.FATAL]
    assert level_from_string("INFO ") < level_from_string("WARN ") < level_from_string("ERROR")