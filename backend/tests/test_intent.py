import pytest

from intent import detect_topic_tags, determine_risk_level
from schemas import RiskLevel, TopicTag


@pytest.mark.parametrize(
    "message,expected",
    [
        ("My partner never texts back and I get anxious", [TopicTag.ATTACHMENT_ANXIETY]),
        ("I keep my distance when things get serious", [TopicTag.ATTACHMENT_AVOIDANCE]),
        ("I had a hard mushroom trip", [TopicTag.PSYCHEDELIC_INTEGRATION]),
        ("I feel so LONELY lately", [TopicTag.SOCIAL_COHERENCE]),
        ("Sometimes I want to die", [TopicTag.SUICIDALITY]),
        ("Everything feels unreal", [TopicTag.DISSOCIATION]),
        ("What a nice day", []),
    ],
)
def test_detect_topic_tags(message, expected):
    assert detect_topic_tags(message) == expected


def test_multiple_tags_come_back_in_fixed_order():
    tags = detect_topic_tags("Since the LSD journey I feel detached and my relationship is suffering")

    assert tags == [
        TopicTag.ATTACHMENT_ANXIETY,
        TopicTag.PSYCHEDELIC_INTEGRATION,
        TopicTag.DISSOCIATION,
    ]


@pytest.mark.parametrize(
    "tags,expected",
    [
        ([], RiskLevel.LOW),
        ([TopicTag.SOCIAL_COHERENCE, TopicTag.ATTACHMENT_AVOIDANCE], RiskLevel.LOW),
        ([TopicTag.ATTACHMENT_ANXIETY], RiskLevel.MEDIUM),
        ([TopicTag.PSYCHEDELIC_INTEGRATION], RiskLevel.MEDIUM),
        ([TopicTag.DISSOCIATION, TopicTag.ATTACHMENT_ANXIETY], RiskLevel.HIGH),
        ([TopicTag.SUICIDALITY, TopicTag.DISSOCIATION], RiskLevel.EMERGENCY),
    ],
)
def test_determine_risk_level(tags, expected):
    assert determine_risk_level(tags) == expected
