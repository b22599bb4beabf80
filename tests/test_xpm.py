import pytest

from solong.colors import find_color
from solong.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    color_value,
    load_xpm,
    parse_xpm,
    parse_xpm_text,
    split_words,
    strip_comments,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1 ",
"  c None",
". c red",
"X c #0000FF",
/* pixels */
". X",
"X. ",
};
// trailing note
"""


def test_split_words_spaces_and_tabs():
    assert split_words("  a\tb   c ") == ["a", "b", "c"]


def test_split_words_keeps_newlines_inside_words():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_comments_preserves_length_and_removes_block():
    text = 'x /* gone */ "keep"'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert "gone" not in result
    assert '"keep"' in result


def test_strip_comments_ignores_markers_inside_strings():
    text = '"a /* b */ c"'
    assert strip_comments(text) == text


def test_strip_comments_line_comment_blanks_newline():
    result = strip_comments('"a" // note\n"b"')
    assert "note" not in result
    assert "\n" not in result
    assert result.endswith('"b"')


def test_color_value_hex():
    assert color_value("#00ff00", None) == 0x00FF00


def test_color_value_named_case_insensitive():
    assert color_value("RED", None) == 0xFF0000


def test_color_value_joins_suffix():
    assert color_value("light", "blue") == find_color("light blue")


def test_color_value_none_is_transparent_marker():
    assert color_value("None", None) == -1


def test_color_value_unknown_is_zero():
    assert color_value("nosuchcolor", None) == 0


def test_parse_xpm_text_sample():
    image = parse_xpm_text(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == TRANSPARENT
    assert image.pixel(2, 0) == color_value("#0000FF", None)
    assert image.rows[1] == (color_value("#0000FF", None), 0xFF0000, TRANSPARENT)


def test_parse_xpm_three_chars_per_pixel():
    image = parse_xpm(["2 1 2 3", "aaa c red", "bbb c white", "bbbaaa"])
    assert image.rows == ((find_color("white"), 0xFF0000),)


def test_duplicate_keys_short_codes_last_wins():
    image = parse_xpm(["1 1 2 1", "a c red", "a c white", "a"])
    assert image.pixel(0, 0) == find_color("white")


def test_duplicate_keys_long_codes_first_wins():
    image = parse_xpm(["1 1 2 3", "aaa c red", "aaa c white", "aaa"])
    assert image.pixel(0, 0) == 0xFF0000


def test_unknown_pixel_key_is_black():
    image = parse_xpm(["1 1 1 1", "a c red", "z"])
    assert image.pixel(0, 0) == 0


@pytest.mark.parametrize(
    "lines",
    [
        ["0 1 1 1", "a c red", "a"],
        ["1 1 1", "a c red", "a"],
        ["1 1 1 1", "a s red", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c red", "a"],
        ["2 1 1 1", "a c red", "a"],
        [],
    ],
)
def test_malformed_data_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_pixel_out_of_range():
    image = parse_xpm(["1 1 1 1", "a c red", "a"])
    with pytest.raises(IndexError):
        image.pixel(1, 0)


def test_to_argb_bytes():
    image = parse_xpm_text(SAMPLE)
    data = image.to_argb_bytes()
    assert len(data) == 4 * image.width * image.height
    assert data[0:4] == b"\xff\xff\x00\x00"
    assert data[4:8] == b"\x00\x00\x00\x00"


def test_load_xpm_round_trip(tmp_path):
    path = tmp_path / "tile.xpm"
    path.write_text(SAMPLE)
    assert load_xpm(path) == parse_xpm_text(SAMPLE)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "absent.xpm")


def test_image_is_value_object():
    first = XpmImage(1, 1, ((0xFF0000,),))
    assert first == parse_xpm(["1 1 1 1", "a c red", "a"])