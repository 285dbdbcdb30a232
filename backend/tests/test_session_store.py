import pytest

from schemas import LLMResponse, ProcessResult, RiskLevel, SessionMessage, TopicTag, ValidationResult
from session_store import SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _result(text: str, score: float) -> ProcessResult:
    return ProcessResult(
        response=LLMResponse(provider="groq-llama-3.3-70b", raw_response=text, latency_ms=3.0),
        validation=ValidationResult(passed=score >= 0.7, coherence_score=score),
        passed=score >= 0.7,
    )


def test_get_or_create_returns_same_session():
    store = SessionStore()
    first = store.get_or_create("s1", "u1")
    second = store.get_or_create("s1", "someone-else")

    assert first is second
    assert first.user_id == "u1"
    assert first.risk_level == RiskLevel.LOW
    assert len(store) == 1


def test_idle_sessions_expire():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=100, max_sessions=10, clock=clock)
    store.get_or_create("s1", "u1")

    clock.now = 50
    assert store.get("s1") is not None
    clock.now = 140
    assert store.get("s1") is not None  # touched at 50
    clock.now = 241
    assert store.get("s1") is None
    assert len(store) == 0


def test_least_recently_used_session_is_evicted():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=1000, max_sessions=2, clock=clock)
    store.get_or_create("a", "u")
    store.get_or_create("b", "u")
    store.get("a")
    store.get_or_create("c", "u")

    assert store.get("b") is None
    assert store.get("a") is not None
    assert store.get("c") is not None


def test_invalid_capacity():
    with pytest.raises(ValueError):
        SessionStore(max_sessions=0)


def test_topic_tags_keep_set_semantics(session):
    added = SessionStore.add_topic_tags(session, [TopicTag.SOCIAL_COHERENCE, TopicTag.DISSOCIATION])
    again = SessionStore.add_topic_tags(session, [TopicTag.DISSOCIATION, TopicTag.SUICIDALITY])

    assert added == [TopicTag.SOCIAL_COHERENCE, TopicTag.DISSOCIATION]
    assert again == [TopicTag.SUICIDALITY]
    assert session.topic_tags == [TopicTag.SOCIAL_COHERENCE, TopicTag.DISSOCIATION, TopicTag.SUICIDALITY]


def test_record_exchange_and_summary(session):
    SessionStore.replace_messages(session, [SessionMessage(role="client", content="earlier")])
    SessionStore.record_exchange(session, "I feel lost", _result("Let me explain.", 0.8))
    SessionStore.record_exchange(session, "Still lost", _result("Short.", 0.4))

    assert [m.role for m in session.messages] == ["client", "client", "therapist", "client", "therapist"]
    therapist = session.messages[2]
    assert therapist.content == "Let me explain."
    assert therapist.coherence_score == 0.8
    assert therapist.llm_providers == ["groq-llama-3.3-70b"]
    assert session.coherence_history == [0.8, 0.4]

    summary = SessionStore.summarize(session)
    assert summary.message_count == 5
    assert summary.average_coherence == pytest.approx(0.6)


def test_summary_without_scores(session):
    assert SessionStore.summarize(session).average_coherence is None
