"""Tests for preview text and newsletter helpers."""

from one_take_studio.application.newsletter import newsletter_html, recipients, send_newsletter
from one_take_studio.content.preview import preview_text
from tests.conftest import FakeEmailSender


class TestPreviewText:
    def test_tiktok_hook_and_first_lines_without_shot_notes(self):
        content = "\n".join(["HOOK: a", "BEAT 1: b", "SHOT NOTES:", "BEAT 2: c"])
        text = preview_text({"type": "tiktok", "title": "T", "hook": "Hook!", "content": content})
        assert text == "Hook!\n\nHOOK: a\nBEAT 1: b\nBEAT 2: c"

    def test_tiktok_falls_back_to_title(self):
        assert preview_text({"type": "tiktok", "title": "T", "hook": "", "content": "x"}) == "T\n\nx"

    def test_twitter_first_tweet_or_title(self):
        assert preview_text({"type": "twitter", "title": "T", "content": "1/ a\n\n2/ b"}) == "1/ a"
        assert preview_text({"type": "twitter", "title": "T", "content": ""}) == "T"

    def test_linkedin(self):
        assert preview_text({"type": "linkedin", "title": "T", "content": "p1\n\np2"}) == "T\n\np1"

    def test_newsletter_first_three_paragraphs(self):
        content = "SUBJECT: s\n\nHey friend,\n\nOpening\n\n---\n\nMore"
        assert preview_text({"type": "newsletter", "content": content}) == "SUBJECT: s\n\nHey friend,\n\nOpening"

    def test_unknown_type_truncates(self):
        assert preview_text({"content": "x" * 900}) == "x" * 500

    def test_non_string_fields_treated_as_empty(self):
        assert preview_text({"type": "twitter", "title": "T", "content": ["x"]}) == "T"
        assert preview_text({"type": "linkedin", "title": 7, "content": {"a": 1}}) == "\n\n"
        assert preview_text({"type": "tiktok", "title": "T", "hook": ["h"], "content": None}) == "T\n\n"


class TestNewsletterHelpers:
    def test_html_escapes_body(self):
        html = newsletter_html("<b>hi</b> & bye")
        assert "&lt;b&gt;hi&lt;/b&gt; &amp; bye" in html
        assert html.startswith("<pre ") and html.endswith("</pre>")

    def test_recipients(self):
        assert recipients("a@x.com, b@x.com") == ["a@x.com", "b@x.com"]
        assert recipients(["a@x.com", " ", "b@x.com"]) == ["a@x.com", "b@x.com"]

    def test_send_newsletter(self):
        sender = FakeEmailSender()
        message_id = send_newsletter(sender, to="a@x.com", subject="S", body="Body")
        assert message_id == "<fake-1@example.com>"
        assert sender.sent[0]["to"] == ["a@x.com"]
        assert sender.sent[0]["text_body"] == "Body"
