"""
Tests for the Gemini summary client, with the google.generativeai calls replaced.
"""

import pytest

from recap.config import TONE_INSTRUCTIONS
from recap.errors import GenerationFailed
from recap.utils import gemini_client
from recap.utils.gemini_client import GeminiClient, build_prompt, tone_instruction


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    prompts = []
    reply = "## Summary 📋\n- Decision taken"
    error = None

    def __init__(self, model_name):
        self.model_name = model_name

    def generate_content(self, prompt):
        FakeModel.prompts.append((self.model_name, prompt))
        if FakeModel.error is not None:
            raise FakeModel.error
        return FakeResponse(FakeModel.reply)


@pytest.fixture
def fake_genai(monkeypatch):
    configured = {}
    FakeModel.prompts = []
    FakeModel.error = None
    monkeypatch.setattr(gemini_client.genai, "configure", lambda api_key: configured.update(api_key=api_key))
    monkeypatch.setattr(gemini_client.genai, "GenerativeModel", FakeModel)
    return configured


class TestPrompt:
    def test_contains_all_parts(self):
        prompt = build_prompt("Ana: ship Friday", "List the decisions", "casual")
        assert "Ana: ship Friday" in prompt
        assert "CUSTOM INSTRUCTIONS: List the decisions" in prompt
        assert TONE_INSTRUCTIONS["casual"] in prompt

    def test_unknown_tone_falls_back(self):
        assert tone_instruction("sarcastic") == TONE_INSTRUCTIONS["professional"]


class TestGeminiClient:
    def test_generate(self, fake_genai):
        client = GeminiClient(api_key="key-123", model="gemini-test")
        assert fake_genai == {"api_key": "key-123"}

        summary = client.generate_summary("Ana: ship Friday", "Decisions only", "concise")
        assert summary == FakeModel.reply
        model_name, prompt = FakeModel.prompts[0]
        assert model_name == "gemini-test"
        assert TONE_INSTRUCTIONS["concise"] in prompt

    def test_missing_key(self, fake_genai, monkeypatch):
        monkeypatch.setattr(gemini_client, "GEMINI_API_KEY", None)
        client = GeminiClient()
        with pytest.raises(GenerationFailed) as excinfo:
            client.generate_summary("t", "p", "professional")
        assert "not configured" in excinfo.value.message
        assert FakeModel.prompts == []

    def test_api_error(self, fake_genai):
        FakeModel.error = RuntimeError("429 quota exceeded")
        client = GeminiClient(api_key="key-123")
        with pytest.raises(GenerationFailed) as excinfo:
            client.generate_summary("t", "p", "professional")
        assert "quota exceeded" in excinfo.value.message
