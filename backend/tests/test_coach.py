"""
Tests for the AI coach flow
"""
from types import SimpleNamespace

import pytest

from dayzero.core.constants import (
    COACH_APOLOGY_MESSAGE,
    COACH_LIMIT_REACHED_MESSAGE,
    COACH_OFF_TOPIC_MESSAGE,
)
from dayzero.core.exceptions import RemoteUnavailableError, ValidationError
from dayzero.services.coach import CoachService, OpenAICoachBackend, clip_words, is_off_topic
from .conftest import FakeCoachBackend


def test_clip_words():
    assert clip_words("  short answer ") == "short answer"
    long_text = " ".join(f"w{i}" for i in range(200))
    clipped = clip_words(long_text)
    assert clipped.endswith("…")
    assert len(clipped.rstrip("…").split()) == 150
    assert clip_words(" ".join(["x"] * 150)) == " ".join(["x"] * 150)


def test_off_topic_guard():
    assert is_off_topic("Should I buy crypto?")
    assert is_off_topic("thoughts on POLITICS")
    assert not is_off_topic("How do I stick to running?")


def test_ask_answers_and_consumes_quota(coach, coach_backend, entitlements):
    result = coach.ask("  How do I start meditating?  ")
    assert result.answered is True
    assert result.answer == coach_backend.answer
    assert (result.used, result.max) == (1, 1)
    assert coach_backend.prompts == ["How do I start meditating?"]
    assert entitlements.get_quota().used_today == 1


def test_ask_when_limit_reached(coach, coach_backend):
    coach.ask("first question")
    result = coach.ask("second question")
    assert result.answered is False
    assert result.answer == COACH_LIMIT_REACHED_MESSAGE
    assert coach_backend.prompts == ["first question"]


def test_ask_clips_long_answers(entitlements):
    service = CoachService(entitlements, FakeCoachBackend(answer="word " * 300))
    assert len(service.ask("motivate me").answer.split()) == 150


def test_backend_failure_returns_apology_without_spending_quota(entitlements):
    service = CoachService(entitlements, FakeCoachBackend(fail=True))
    result = service.ask("help me focus")
    assert result.answered is False
    assert result.answer == COACH_APOLOGY_MESSAGE
    assert entitlements.get_quota().used_today == 0


def test_missing_backend_returns_apology(entitlements):
    assert CoachService(entitlements).ask("hi coach").answer == COACH_APOLOGY_MESSAGE


def test_off_topic_prompt_never_reaches_backend(coach, coach_backend):
    result = coach.ask("best stocks this week?")
    assert result.answer == COACH_OFF_TOPIC_MESSAGE
    assert coach_backend.prompts == []


def test_blank_prompt_rejected(coach):
    with pytest.raises(ValidationError):
        coach.ask("   ")


def _fake_openai(content=None, error=None):
    def create(**kwargs):
        create.kwargs = kwargs
        if error:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create))), create


def test_openai_backend_sends_system_prompt():
    client, create = _fake_openai(content="  Keep it tiny.  ")
    backend = OpenAICoachBackend(client, model="test-model")
    assert backend.complete("how to floss daily") == "Keep it tiny."
    assert create.kwargs["model"] == "test-model"
    assert create.kwargs["messages"][0]["role"] == "system"
    assert create.kwargs["messages"][1] == {"role": "user", "content": "how to floss daily"}


@pytest.mark.parametrize("content,error", [(None, RuntimeError("boom")), ("", None), (None, None)])
def test_openai_backend_failures(content, error):
    client, _ = _fake_openai(content=content, error=error)
    with pytest.raises(RemoteUnavailableError):
        OpenAICoachBackend(client, model="m").complete("hi")
