# tests/unit/llm/test_models.py
"""Tests for llm/models.py."""

from __future__ import annotations

from contentengine.llm.models import GenerationConfig, LLMResponse


class TestGenerationConfig:
    def test_empty_dict_when_unset(self):
        assert GenerationConfig().to_provider_dict() == {}

    def test_only_set_fields(self):
        config = GenerationConfig(temperature=0.0)
        assert config.to_provider_dict() == {"temperature": 0.0}

    def test_both_fields(self):
        config = GenerationConfig(temperature=0.7, max_output_tokens=1024)
        assert config.to_provider_dict() == {"temperature": 0.7, "max_output_tokens": 1024}


class TestLLMResponse:
    def test_defaults(self):
        resp = LLMResponse(text="hi", model="gemini-2.0-flash", provider="google")
        assert resp.latency_ms == 0
        assert resp.input_tokens == 0
        assert resp.output_tokens == 0
        assert resp.raw_response is None
