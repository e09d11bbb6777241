"""Tests for the tolerant literal scanner."""

from artifact_html.extractor.literals import (
    bracket_pairs,
    parse_elements,
    parse_object,
    parse_scalar,
    split_top_level,
    tag_extent,
)


# ---------------------------------------------------------------------------
# bracket_pairs
# ---------------------------------------------------------------------------

class TestBracketPairs:
    def test_nested(self):
        pairs = bracket_pairs("[1, [2, 3], 4] rest")
        assert pairs[0] == 13
        assert pairs[4] == 9

    def test_bracket_inside_string(self):
        pairs = bracket_pairs('["a]", "b"]')
        assert pairs == {0: 10}

    def test_bracket_inside_line_comment(self):
        assert bracket_pairs("[1, // ]\n 2]") == {0: 11}

    def test_bracket_inside_block_comment(self):
        text = "[1, /* ] */ 2]"
        assert bracket_pairs(text) == {0: len(text) - 1}

    def test_escaped_quote(self):
        text = r'["say \"]\"", 1]'
        assert bracket_pairs(text) == {0: len(text) - 1}

    def test_unbalanced(self):
        pairs = bracket_pairs("[1, 2, {a: 3}")
        assert pairs[0] == -1
        assert pairs[7] == 12

    def test_stray_closer_is_ignored(self):
        assert bracket_pairs("] [x]") == {2: 4}


class TestTagExtent:
    def test_simple(self):
        text = "<PieChart>"
        assert tag_extent(text, 0) == (len(text) - 1, True)

    def test_arrow_function_attribute(self):
        text = "<BarChart data={rows} onClick={() => go()}>"
        assert tag_extent(text, 0) == (len(text) - 1, True)

    def test_unterminated(self):
        text = "<BarChart data={rows}"
        assert tag_extent(text, 0) == (len(text), False)

    def test_stops_at_next_tag(self):
        assert tag_extent("<Bar <Line>", 0) == (5, False)


# ---------------------------------------------------------------------------
# split_top_level
# ---------------------------------------------------------------------------

class TestSplitTopLevel:
    def test_mixed(self):
        assert split_top_level('1, {a: 1, b: 2}, "x,y"') == ["1", "{a: 1, b: 2}", '"x,y"']

    def test_trailing_comma_and_comments(self):
        body = "\n  1, // first\n  2, /* second */\n"
        assert split_top_level(body) == ["1", "2"]

    def test_empty(self):
        assert split_top_level("   ") == []


# ---------------------------------------------------------------------------
# parse_scalar / parse_object / parse_elements
# ---------------------------------------------------------------------------

class TestParseScalar:
    def test_strings(self):
        assert parse_scalar('"hi"') == "hi"
        assert parse_scalar("'it\\'s'") == "it's"
        assert parse_scalar("`plain`") == "plain"

    def test_numbers(self):
        assert parse_scalar("42") == 42.0
        assert parse_scalar("-3.5") == -3.5
        assert parse_scalar("1_000") == 1000.0
        assert parse_scalar(".5") == 0.5
        assert parse_scalar("2e3") == 2000.0

    def test_cast_is_dropped(self):
        assert parse_scalar("12 as number") == 12.0

    def test_expressions_are_none(self):
        assert parse_scalar("COLORS[0]") is None
        assert parse_scalar("Math.random() * 100") is None
        assert parse_scalar("`${prefix}-a`") is None
        assert parse_scalar("true") is None


class TestParseObject:
    def test_flat_fields(self):
        text = "{ name: \"A\", \"value\": 10, fill: '#fff', nested: { x: 1 }, ...rest }"
        assert parse_object(text) == {"name": "A", "value": 10.0, "fill": "#fff"}

    def test_unparseable_value_is_none(self):
        assert parse_object("{ name: 'A', value: compute(1) }") == {"name": "A", "value": None}

    def test_first_duplicate_key_wins(self):
        assert parse_object("{ value: 1, value: 2 }") == {"value": 1.0}


class TestParseElements:
    def test_objects_and_scalars(self):
        body = '{name: "A", value: 1}, 5, "label", foo()'
        assert parse_elements(body) == [
            {"name": "A", "value": 1.0},
            {"value": 5.0},
            {"name": "label"},
        ]

    def test_empty_body(self):
        assert parse_elements("") == []
