from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"  # needs human referral language
    EMERGENCY = "emergency"  # immediate human referral


class TopicTag(str, Enum):
    ATTACHMENT_ANXIETY = "attachment_anxiety"
    ATTACHMENT_AVOIDANCE = "attachment_avoidance"
    PSYCHEDELIC_INTEGRATION = "psychedelic"
    SUICIDALITY = "suicidal"
    DISSOCIATION = "dissociation"
    SOCIAL_COHERENCE = "social"
    WORKSHOP_REQUEST = "workshop"


class LLMCapability(str, Enum):
    ATTACHMENT_THEORY = "attachment"
    PSYCHEDELIC_INTEGRATION = "psychedelic"
    SOCIAL_PSYCHOLOGY = "social"
    CRISIS_INTERVENTION = "crisis"
    WORKSHOP_GENERATION = "workshop"


# Session Schemas
class SessionMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["client", "therapist"]
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)
    coherence_score: Optional[float] = None  # therapist messages only
    llm_providers: Optional[list[str]] = None  # therapist messages only


class TherapeuticSession(BaseModel):
    session_id: str
    user_id: str
    messages: list[SessionMessage] = Field(default_factory=list)
    topic_tags: list[TopicTag] = Field(default_factory=list)
    risk_level: RiskLevel = RiskLevel.LOW
    coherence_history: list[float] = Field(default_factory=list)
    encrypted: bool = False


# LLM Schemas
class LLMRequest(BaseModel):
    prompt: str
    context: TherapeuticSession
    max_tokens: int = 800
    temperature: float = 0.7
    topic_tags: list[TopicTag] = Field(default_factory=list)


class LLMResponse(BaseModel):
    provider: str
    raw_response: str
    latency_ms: float
    token_count: int = 0
    timestamp: datetime = Field(default_factory=_utcnow)


class RateLimitInfo(BaseModel):
    requests_per_minute: int
    tokens_per_minute: int


class ProviderInfo(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    name: str
    endpoint: str
    model_name: str
    rate_limit: RateLimitInfo
    capabilities: list[LLMCapability] = Field(default_factory=list)


# Validation Schemas
class ViolatedAxiom(BaseModel):
    axiom_id: str
    description: str
    severity: Literal["critical", "warning"]
    violation_details: str


class ThetaResonance(BaseModel):
    client_field: float
    therapist_field: float
    dyad_resonance: float
    attachment_coherence: float


class ValidationResult(BaseModel):
    passed: bool
    coherence_score: float
    violated_axioms: list[ViolatedAxiom] = Field(default_factory=list)
    repair_suggestions: list[str] = Field(default_factory=list)
    tensor_resonance: Optional[ThetaResonance] = None  # not computed yet


class ProcessResult(BaseModel):
    response: LLMResponse
    validation: ValidationResult
    passed: bool


class RepairResult(ProcessResult):
    attempts: int


# HTTP Schemas
class ChatHistoryItem(BaseModel):
    role: Literal["client", "therapist"]
    content: str
    timestamp: Optional[datetime] = None
    coherence_score: Optional[float] = None


class ChatRequest(BaseModel):
    message: str = ""
    session_id: str = ""
    user_id: str = ""
    messages: Optional[list[ChatHistoryItem]] = None
    provider: Optional[str] = None
    auto_repair: bool = False
    max_attempts: Optional[int] = None


class ChatMetadata(BaseModel):
    provider: str
    latency_ms: float
    token_count: int
    risk_level: RiskLevel
    topic_tags: list[TopicTag]
    attempts: int = 1


class ChatResponse(BaseModel):
    response: str
    validation: ValidationResult
    metadata: ChatMetadata


class SessionSummaryInfo(BaseModel):
    session_id: str
    message_count: int
    topic_tags: list[TopicTag]
    risk_level: RiskLevel
    average_coherence: Optional[float] = None


class ExportSummaryRequest(BaseModel):
    session_id: Optional[str] = None
    messages: list[ChatHistoryItem] = Field(default_factory=list)
    coherence_scores: list[float] = Field(default_factory=list)


class SessionSummary(BaseModel):
    summary: str
    recommendations: str
