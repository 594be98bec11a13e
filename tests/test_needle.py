from __future__ import annotations

from assertpack.diff import needle_position, quote_text


def test_quote_text_escapes_control_characters() -> None:
    assert quote_text('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert quote_text("naïve") == '"naïve"'


def test_every_occurrence_is_marked() -> None:
    position = needle_position("hello world", "o")

    assert position.found is True
    assert position.quoted_haystack == '"hello world"'
    assert position.positions == "     ^  ^    "


def test_markers_align_with_escaped_text() -> None:
    position = needle_position("a\nb", "\n")

    assert position.quoted_needle == "\\n"
    assert position.positions == "  ^^  "


def test_render_places_markers_under_haystack() -> None:
    rendered = needle_position("abcabc", "bc").render()

    assert rendered.splitlines() == [
        "Needle: bc",
        'Haystack: "abcabc"',
        "            ^^ ^^ ",
    ]


def test_absent_needle_has_blank_marker_line() -> None:
    position = needle_position("abc", "z")

    assert position.found is False
    assert position.positions.strip() == ""
    assert position.to_dict() == {
        "quoted_haystack": '"abc"',
        "quoted_needle": "z",
        "positions": "     ",
        "found": False,
    }


def test_missing_needle_in_long_haystack() -> None:
    position = needle_position("a haystack with a needle in it", "screw")

    assert position.found is False
    assert position.render().splitlines()[:2] == [
        "Needle: screw",
        'Haystack: "a haystack with a needle in it"',
    ]
    assert set(position.positions) == {" "}
