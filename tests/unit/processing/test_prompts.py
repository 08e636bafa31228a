# tests/unit/processing/test_prompts.py
"""Tests for processing/prompts.py."""

from __future__ import annotations

from contentengine.processing import prompts
from contentengine.processing.models import GenerateOptions, SummarizeOptions, TranslateOptions


class TestPrompts:
    def test_summarize(self):
        p = prompts.summarize_prompt("TEXT", SummarizeOptions(max_length=80, style="bullet"))
        assert "bullet" in p
        assert "under 80 words" in p
        assert p.endswith("TEXT")

    def test_sentiment_requests_json(self):
        p = prompts.sentiment_prompt("TEXT")
        assert "JSON" in p
        assert "Confidence score (0-10)" in p

    def test_keywords_requests_array(self):
        assert "JSON array" in prompts.keywords_prompt("TEXT")

    def test_generate_style(self):
        assert "casual" in prompts.generate_prompt("R", GenerateOptions(style="casual"))

    def test_translate_formatting_toggle(self):
        on = prompts.translate_prompt("T", TranslateOptions(target_language="French"))
        off = prompts.translate_prompt(
            "T", TranslateOptions(target_language="French", preserve_formatting=False)
        )
        assert "French" in on
        assert "Preserve the original formatting" in on
        assert "Preserve the original formatting" not in off
