import pytest

from solong.colors import lookup_color, text_to_rgb


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xFF0000),
        ("green", 0xFF00),
        ("blue", 0xFF),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("navy", 0x80),
        ("light sky", 0x87CEFA),
        ("lightgoldenrodyellow", 0xFAFAD2),
    ],
)
def test_lookup_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_none_is_transparent():
    assert lookup_color("none") == -1


@pytest.mark.parametrize("name", ["RED", "Red", "rEd"])
def test_lookup_ignores_case(name):
    assert lookup_color(name) == lookup_color("red")


def test_lookup_first_entry_wins_for_duplicate_names():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_lookup_unknown_raises_key_error():
    with pytest.raises(KeyError):
        lookup_color("no such colour")


@pytest.mark.parametrize("level", [0, 1, 25, 50, 99, 100])
def test_gray_and_grey_spellings_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_scale_extremes():
    assert lookup_color("gray0") == lookup_color("black")
    assert lookup_color("gray100") == lookup_color("white")


def test_gray_scale_is_monotonic():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)


def test_text_hex_notation():
    assert text_to_rgb("#FF0000", None) == 0xFF0000
    assert text_to_rgb("#ff00ff", None) == lookup_color("magenta")


def test_text_hex_stops_at_invalid_digit():
    assert text_to_rgb("#ff00zz", None) == 0xFF00


def test_text_hex_without_digits_is_zero():
    assert text_to_rgb("#", None) == 0
    assert text_to_rgb("#zz", None) == 0


def test_text_hex_ignores_suffix():
    assert text_to_rgb("#0000ff", "anything") == lookup_color("blue")


@pytest.mark.parametrize("name", ["red", "Snow", "dodgerblue", "none", "gray50"])
def test_text_name_matches_lookup(name):
    assert text_to_rgb(name, None) == lookup_color(name)


def test_text_joins_name_and_suffix():
    assert text_to_rgb("light", "sky") == 0x87CEFA
    assert text_to_rgb("Misty", "Rose") == lookup_color("misty rose")


def test_text_unknown_name_is_zero():
    assert text_to_rgb("nosuchcolor", None) == 0
    assert text_to_rgb("no", "such") == 0


def test_text_default_suffix_is_none():
    assert text_to_rgb("tomato") == lookup_color("tomato")


def test_text_overlong_combined_name_is_truncated():
    long_name = "x" * 70
    assert text_to_rgb(long_name, "red") == 0
    assert text_to_rgb("red", "x" * 100) == 0