"""Tests for the JSON repair pipeline."""

import json

from one_take_studio.content.repair import (
    STAGE_ESCAPED,
    STAGE_FAILED,
    STAGE_SALVAGED,
    STAGE_STRICT,
    STAGE_TRAILING_COMMAS,
    escape_control_characters,
    escape_field_newlines,
    remove_trailing_commas,
    repair_and_parse,
    salvage_array,
)

THREE_POSTS_SECOND_BROKEN = (
    '{"posts": [\n'
    '  {"title": "One", "content": "first", "tags": ["a"]},\n'
    '  {"title": "Two", "content": "second", "tags": ["broken\ntag"]},\n'
    '  {"title": "Three", "content": "third", "tags": ["c"]}\n'
    "]}"
)

# "a 5" closes the string early and leaves an odd quote behind
THREE_POSTS_STRAY_QUOTE = (
    '{"posts": [\n'
    '  {"title": "One", "content": "first", "tags": ["a"]},\n'
    '  {"title": "Two", "content": "a 5" screen\nrocks", "tags": ["b"]},\n'
    '  {"title": "Three", "content": "third", "tags": ["c"]}\n'
    "]}"
)


class TestStages:
    def test_escape_control_characters(self):
        assert escape_control_characters("a\nb\rc\td") == "a\\nb\\rc\\td"
        assert escape_control_characters("bell\x07") == "bell"

    def test_escape_field_newlines_only_touches_named_fields(self):
        doc = '{"content": "line1\nline2", "hook": "x\ny"}'
        fixed = escape_field_newlines(doc)
        assert '"content": "line1\\nline2"' in fixed
        assert '"hook": "x\ny"' in fixed

    def test_escape_field_newlines_respects_escaped_quotes(self):
        doc = '{"content": "he said \\"hi\\"\nthen left"}'
        assert json.loads(escape_field_newlines(doc)) == {"content": 'he said "hi"\nthen left'}

    def test_remove_trailing_commas(self):
        assert json.loads(remove_trailing_commas('{"a": [1, 2, ], "b": 3,\n}')) == {"a": [1, 2], "b": 3}

    def test_remove_trailing_commas_leaves_strings_alone(self):
        doc = '{"content": "a, ]"}'
        assert remove_trailing_commas(doc) == doc


class TestRepairAndParse:
    def test_strict(self):
        outcome = repair_and_parse('{"title": "T"}')
        assert outcome.stage == STAGE_STRICT
        assert outcome.value == {"title": "T"}

    def test_literal_newline_in_content(self):
        outcome = repair_and_parse('{"content": "line1\nline2"}')
        assert outcome.stage == STAGE_ESCAPED
        assert outcome.value == {"content": "line1\nline2"}

    def test_trailing_commas_after_escaping(self):
        outcome = repair_and_parse('{"posts": [{"title": "A", "content": "x\ny",},]}')
        assert outcome.stage == STAGE_TRAILING_COMMAS
        assert outcome.value == {"posts": [{"title": "A", "content": "x\ny"}]}

    def test_salvage_drops_only_the_broken_entry(self):
        outcome = repair_and_parse(THREE_POSTS_SECOND_BROKEN, array_key="posts")
        assert outcome.stage == STAGE_SALVAGED
        assert [p["title"] for p in outcome.value["posts"]] == ["One", "Three"]

    def test_no_salvage_without_array_key(self):
        outcome = repair_and_parse(THREE_POSTS_SECOND_BROKEN)
        assert outcome.stage == STAGE_FAILED
        assert not outcome.ok
        assert outcome.value is None

    def test_garbage_fails(self):
        assert repair_and_parse("not json", array_key="posts").stage == STAGE_FAILED


class TestSalvage:
    def test_ignores_braces_in_strings(self):
        doc = '{"scripts": [{"title": "a {b}", "content": "}"}, {"title": "c"}]}'
        assert salvage_array(doc, "scripts") == [{"title": "a {b}", "content": "}"}, {"title": "c"}]

    def test_skips_entries_without_title(self):
        doc = '{"threads": [{"content": "no title"}, {"title": "kept"}]}'
        assert salvage_array(doc, "threads") == [{"title": "kept"}]

    def test_drops_truncated_tail(self):
        doc = '{"posts": [{"title": "whole"}, {"title": "cut off", "content": "...'
        assert salvage_array(doc, "posts") == [{"title": "whole"}]

    def test_missing_key(self):
        assert salvage_array('{"other": []}', "posts") is None

    def test_stops_at_end_of_array(self):
        doc = '{"posts": [{"title": "in", "content": "x\ny"}], "meta": {"title": "out"}}'
        assert salvage_array(doc, "posts") == [{"title": "in", "content": "x\ny"}]

    def test_nothing_recovered(self):
        assert salvage_array('{"posts": [{"title": "x" "content": 1}]}', "posts") is None

    def test_unbalanced_quote_does_not_swallow_later_entries(self):
        outcome = repair_and_parse(THREE_POSTS_STRAY_QUOTE, array_key="posts")
        assert outcome.stage == STAGE_SALVAGED
        assert [p["title"] for p in outcome.value["posts"]] == ["One", "Three"]
        assert outcome.value["posts"][1] == {"title": "Three", "content": "third", "tags": ["c"]}
