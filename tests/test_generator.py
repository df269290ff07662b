"""Tests for the content generator (analysis pass and the four content passes)."""

import asyncio
import re

from one_take_studio.content.generator import ContentGenerator, parse_analysis, parse_artifacts
from one_take_studio.domain.errors import CompletionError
from tests.conftest import ANALYSIS_JSON, FakeTransport


class TestParseArtifacts:
    def test_fenced_response(self):
        raw = '```json\n{"threads": [{"title": "A", "template": "List", "content": "1/\n2/"}]}\n```'
        [thread] = parse_artifacts("twitter", raw)
        assert thread["template"] == "list"
        assert thread["content"] == "1/\n2/"
        assert thread["id"] == "tw-1"

    def test_missing_array_key(self):
        assert parse_artifacts("linkedin", '{"items": [{"title": "x"}]}') == []

    def test_invalid_json(self):
        assert parse_artifacts("tiktok", "I could not do that, sorry.") == []

    def test_salvaged_posts_keep_positions_compact(self):
        raw = (
            '{"posts": [{"title": "One", "tags": ["a"]}, '
            '{"title": "Two", "tags": ["bad\nnewline"]}, '
            '{"title": "Three"}]}'
        )
        posts = parse_artifacts("linkedin", raw)
        assert [(p["id"], p["title"], p["day"]) for p in posts] == [("li-1", "One", 2), ("li-2", "Three", 4)]

    def test_stray_quote_in_one_post_keeps_the_rest(self):
        raw = (
            '{"posts": [{"title": "One", "content": "first"}, '
            '{"title": "Two", "content": "a 5" screen\nrocks"}, '
            '{"title": "Three", "content": "third"}]}'
        )
        assert [p["title"] for p in parse_artifacts("linkedin", raw)] == ["One", "Three"]


class TestParseAnalysis:
    def test_valid(self):
        analysis = parse_analysis(ANALYSIS_JSON, 95)
        assert analysis["title"] == "The Hustle Myth"
        assert analysis["duration"] == "1:35"

    def test_unparseable_gives_defaults(self):
        assert parse_analysis("no json here", 61) == {
            "title": "Untitled",
            "duration": "1:01",
            "topics": [],
            "spicyMoments": [],
        }


class TestContentGenerator:
    def test_analyze_uses_transcript_duration(self, transcript):
        transport = FakeTransport({"analysis": ANALYSIS_JSON})
        analysis = asyncio.run(ContentGenerator(transport).analyze_transcript(transcript))
        assert analysis["title"] == "The Hustle Myth"
        assert re.match(r"^\d+:\d{2}$", analysis["duration"])
        assert analysis["duration"] == "1:35"

    def test_analyze_returns_none_on_transport_failure(self, transcript, failing_transport):
        assert asyncio.run(ContentGenerator(failing_transport).analyze_transcript(transcript)) is None

    def test_analyze_empty_response_gives_defaults(self, transcript):
        transport = FakeTransport({"analysis": ""})
        analysis = asyncio.run(ContentGenerator(transport).analyze_transcript(transcript))
        assert analysis["title"] == "Untitled"

    def test_generation_settings_passed_to_transport(self, transcript, analysis, happy_transport):
        generator = ContentGenerator(happy_transport, model="test-model")
        scripts = asyncio.run(generator.generate_tiktok_scripts(transcript, analysis))
        assert [s["id"] for s in scripts] == ["tt-1", "tt-2"]
        [call] = happy_transport.calls
        assert call == {
            "kind": "tiktok",
            "user_prompt": call["user_prompt"],
            "model": "test-model",
            "temperature": 0.8,
            "max_tokens": 4000,
        }

    def test_each_pass_returns_empty_list_on_failure(self, transcript, analysis):
        generator = ContentGenerator(FakeTransport(default=CompletionError("down")))
        assert asyncio.run(generator.generate_twitter_threads(transcript, analysis)) == []
        assert asyncio.run(generator.generate_linkedin_posts(transcript, analysis)) == []
        assert asyncio.run(generator.generate_newsletter(transcript, analysis)) == []

    def test_newsletter(self, transcript, analysis, happy_transport):
        [newsletter] = asyncio.run(ContentGenerator(happy_transport).generate_newsletter(transcript, analysis))
        assert newsletter["id"] == "nl-1"
        assert newsletter["content"].startswith("SUBJECT: Rest")
