"""Topic detection and session risk classification for client messages.

Depends only on schemas (no provider/compliance dependencies).
"""

import re
from typing import Iterable

from schemas import RiskLevel, TopicTag

TOPIC_PATTERNS: tuple[tuple[TopicTag, re.Pattern], ...] = (
    (TopicTag.ATTACHMENT_ANXIETY, re.compile(r"anxious|anxiety|attachment|partner|relationship|abandon")),
    (TopicTag.ATTACHMENT_AVOIDANCE, re.compile(r"distance|avoid|close|intimacy")),
    (TopicTag.PSYCHEDELIC_INTEGRATION, re.compile(r"psychedelic|trip|mushroom|lsd|dmt|integration|journey")),
    (TopicTag.SOCIAL_COHERENCE, re.compile(r"friends|social|lonely|isolated|disconnect")),
    (TopicTag.SUICIDALITY, re.compile(r"suicid|kill myself|end it all|want to die")),
    (TopicTag.DISSOCIATION, re.compile(r"dissociat|unreal|detach|derealization")),
)


def detect_topic_tags(message: str) -> list[TopicTag]:
    """Tags whose keywords occur in *message* (substring match, lower-cased)."""
    low = (message or "").lower()
    return [tag for tag, pattern in TOPIC_PATTERNS if pattern.search(low)]


def determine_risk_level(tags: Iterable[TopicTag]) -> RiskLevel:
    found = set(tags)
    if TopicTag.SUICIDALITY in found:
        return RiskLevel.EMERGENCY
    if TopicTag.DISSOCIATION in found:
        return RiskLevel.HIGH
    if TopicTag.ATTACHMENT_ANXIETY in found or TopicTag.PSYCHEDELIC_INTEGRATION in found:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW
