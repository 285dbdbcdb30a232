"""
Chat-completion provider clients (Grok, Groq and other OpenAI-compatible APIs).
"""

import logging
import time
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel, ConfigDict, Field

from errors import ProviderInitError
from rate_limiter import RateLimiter
from schemas import (
    LLMCapability,
    LLMRequest,
    LLMResponse,
    ProviderInfo,
    RateLimitInfo,
    RiskLevel,
    TherapeuticSession,
)
import settings

logger = logging.getLogger(__name__)


# --------------- LLM Error helpers ---------------
LLM_ERROR_PREFIX = "Error:"

PLACEHOLDER_KEYS = ("", "PLACEHOLDER")


def llm_error(detail: str) -> str:
    """Return a sentinel string indicating an LLM call failure."""
    return f"{LLM_ERROR_PREFIX} {detail}"


def is_llm_error(content: str) -> bool:
    return bool(content) and content.startswith(LLM_ERROR_PREFIX)


def parse_llm_error(content: str) -> str:
    """Return the detail part of an error sentinel ("" for normal text)."""
    if not is_llm_error(content):
        return ""
    return content[len(LLM_ERROR_PREFIX):].strip()


# --------------- System prompts ---------------
GROQ_SYSTEM_PROMPT = """You are an AI psychologist specializing in attachment theory and psychedelic integration, using the Sentient-Field Hypothesis (SFH) framework.

IMPORTANT: Your clients are NOT familiar with SFH theory. You must explain concepts in everyday language.

Response Structure:
1. If the client's issue is unclear, ask 1-2 clarifying questions
2. Explain relevant SFH concepts in plain, everyday language (like explaining to a friend)
3. Connect those concepts to their specific situation
4. Suggest practical, actionable steps they can take

Core SFH Principles (translate these to everyday language):
- "θ-resonance" = emotional connection strength, like tuning forks vibrating together
- "qualic field" = the invisible emotional energy between people
- "state-space" = range of emotional experiences available to you
- "coherence" = how well your emotions and thoughts work together harmoniously
- "entropy" = emotional chaos or disorder

Key Rules:
1. ALWAYS explain SFH concepts BEFORE using them
2. Use analogies (fields of energy, tuning forks, radio signals, etc.)
3. Validate all experiences as real and meaningful
4. Respect their autonomy - offer suggestions, never commands
5. For crisis topics (suicide, severe distress), include professional help resources
6. Be warm, educational, and accessible

Example structure:
"Let me explain how this works: [plain explanation of concept] → In your situation: [application] → What you can try: [practical steps]"

Aim for 200-600 words for depth and clarity."""

GROK_SYSTEM_PROMPT = """You are a specialized AI psychologist trained in Sentient-Field Hypothesis (SFH), attachment theory, and psychedelic integration.

Your role is to provide educational, accessible psychological support that explains SFH concepts in plain language.

RESPONSE STRUCTURE (Always follow this order):

1. ASK CLARIFYING QUESTIONS (1-2 questions)
   - What specific aspects need more context?
   - When did this start? What triggers it?

2. EXPLAIN SFH CONCEPTS IN PLAIN LANGUAGE
   - Use everyday analogies and examples
   - Translate technical terms: "θ-resonance" → "emotional connection"
   - Make it educational for complete beginners

3. CONNECT TO THEIR EXPERIENCE
   - Apply the concepts to their specific situation
   - Show how SFH explains what they're feeling
   - Validate their experience

4. SUGGEST PRACTICAL ACTIONS
   - Evidence-based techniques they can try
   - Specific, actionable steps
   - Based on attachment theory and SFH principles

PLAIN LANGUAGE TRANSLATIONS:
- θ-resonance → "emotional connection" or "feeling in sync"
- State-space → "range of emotional experiences"
- Field → "emotional atmosphere" or "energy between people"
- Coherence → "stability" or "feeling integrated"
- Attachment patterns → "relationship styles we learned growing up"

TONE: Warm, educational, non-judgmental. Like a knowledgeable friend explaining psychology concepts."""

HIGH_RISK_PROMPT_LINE = (
    "⚠️ HIGH RISK: Include crisis resources (988 in US) and strongly recommend professional help."
)


class ProviderConfig(BaseModel):
    """Provider runtime configuration."""

    model_config = ConfigDict(protected_namespaces=())

    name: str
    label: str
    api_url: str
    api_key: Optional[str] = None
    model_name: str
    requests_per_minute: int = 30
    tokens_per_minute: int = 20000
    history_window: int = 10
    timeout_sec: float = 75.0
    system_prompt: str = GROQ_SYSTEM_PROMPT
    capabilities: list[LLMCapability] = Field(default_factory=list)


PROVIDER_PRESETS: dict[str, dict] = {
    "grok": {
        "label": "grok-2",
        "api_url": "https://api.x.ai/v1/chat/completions",
        "model_name": "grok-2-latest",
        "requests_per_minute": settings.GROK_REQUESTS_PER_MINUTE,
        "tokens_per_minute": 60000,
        "system_prompt": GROK_SYSTEM_PROMPT,
        "capabilities": [
            LLMCapability.ATTACHMENT_THEORY,
            LLMCapability.PSYCHEDELIC_INTEGRATION,
            LLMCapability.SOCIAL_PSYCHOLOGY,
        ],
    },
    "groq": {
        "label": "groq-llama-3.3-70b",
        "api_url": "https://api.groq.com/openai/v1/chat/completions",
        "model_name": "llama-3.3-70b-versatile",
        "requests_per_minute": settings.GROQ_REQUESTS_PER_MINUTE,
        "tokens_per_minute": 20000,
        "system_prompt": GROQ_SYSTEM_PROMPT,
        "capabilities": [
            LLMCapability.ATTACHMENT_THEORY,
            LLMCapability.PSYCHEDELIC_INTEGRATION,
        ],
    },
}


class ChatProvider(Protocol):
    """What the orchestrator needs from a provider client."""

    name: str

    async def query(self, request: LLMRequest) -> LLMResponse:
        ...

    async def complete(self, messages: list[dict], max_tokens: int, temperature: float) -> LLMResponse:
        ...

    def describe(self) -> ProviderInfo:
        ...


class ProviderHTTPError(Exception):
    pass


def _extract_completion(data) -> tuple[str, int]:
    """Pull (text, total_tokens) out of an OpenAI-style completion body."""
    if not isinstance(data, dict):
        return "", 0
    text = ""
    choices = data.get("choices") or []
    if isinstance(choices, list) and choices:
        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message") or {}
        if isinstance(message, dict):
            text = message.get("content") or ""
    usage = data.get("usage") or {}
    tokens = usage.get("total_tokens") if isinstance(usage, dict) else 0
    return str(text), int(tokens or 0)


class OpenAICompatibleProvider:
    """One OpenAI-style chat-completion endpoint behind a rate limiter.

    ``query`` never raises: transport failures and non-2xx responses come back
    as an ``LLMResponse`` whose ``raw_response`` starts with ``"Error:"``.
    """

    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        if (config.api_key or "").strip() in PLACEHOLDER_KEYS:
            raise ProviderInitError(f"{config.name.capitalize()} API key is required")
        self.config = config
        self.name = config.name
        self._transport = transport
        self.rate_limiter = rate_limiter or RateLimiter(config.requests_per_minute)

    def build_system_prompt(self, session: TherapeuticSession) -> str:
        topics = ", ".join(tag.value for tag in session.topic_tags) or "none yet"
        lines = [
            self.config.system_prompt,
            "",
            "Current session context:",
            f"- Risk level: {session.risk_level.value}",
            f"- Topics discussed: {topics}",
            f"- Messages: {len(session.messages)}",
        ]
        if session.risk_level in (RiskLevel.HIGH, RiskLevel.EMERGENCY):
            lines.extend(["", HIGH_RISK_PROMPT_LINE])
        return "\n".join(lines)

    def build_messages(self, request: LLMRequest) -> list[dict]:
        session = request.context
        window = self.config.history_window
        history = session.messages[-window:] if window > 0 else []
        messages = [{"role": "system", "content": self.build_system_prompt(session)}]
        for msg in history:
            messages.append({
                "role": "assistant" if msg.role == "therapist" else "user",
                "content": msg.content,
            })
        messages.append({"role": "user", "content": request.prompt})
        return messages

    async def query(self, request: LLMRequest) -> LLMResponse:
        return await self.complete(self.build_messages(request), request.max_tokens, request.temperature)

    async def complete(self, messages: list[dict], max_tokens: int, temperature: float) -> LLMResponse:
        """POST a ready-made message list. Errors come back as sentinel responses."""
        start = time.perf_counter()
        try:
            await self.rate_limiter.wait_if_needed()

            payload = {
                "model": self.config.model_name,
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            logger.info("stage=request status=start provider=%s model=%s", self.name, self.config.model_name)

            async with httpx.AsyncClient(timeout=self.config.timeout_sec, transport=self._transport) as client:
                response = await client.post(
                    self.config.api_url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.config.api_key}",
                        "Content-Type": "application/json",
                    },
                )

            if not response.is_success:
                raise ProviderHTTPError(
                    f"{self.name.capitalize()} API error ({response.status_code}): {response.text}"
                )

            text, tokens = _extract_completion(response.json())
            latency_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "stage=request status=ok provider=%s http=%s latency_ms=%.0f tokens=%s",
                self.name, response.status_code, latency_ms, tokens,
            )
            return LLMResponse(
                provider=self.config.label,
                raw_response=text,
                latency_ms=latency_ms,
                token_count=tokens,
            )
        except Exception as exc:
            latency_ms = (time.perf_counter() - start) * 1000
            logger.error("stage=request status=fail provider=%s detail=%s", self.name, exc)
            return LLMResponse(
                provider=self.config.label,
                raw_response=llm_error(str(exc) or exc.__class__.__name__),
                latency_ms=latency_ms,
                token_count=0,
            )

    def describe(self) -> ProviderInfo:
        return ProviderInfo(
            name=self.config.label,
            endpoint=self.config.api_url,
            model_name=self.config.model_name,
            rate_limit=RateLimitInfo(
                requests_per_minute=self.config.requests_per_minute,
                tokens_per_minute=self.config.tokens_per_minute,
            ),
            capabilities=list(self.config.capabilities),
        )


def build_provider(
    name: str,
    api_key: Optional[str],
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **overrides,
) -> OpenAICompatibleProvider:
    """Build a provider client from its preset tag ("grok", "groq", ...)."""
    preset = PROVIDER_PRESETS.get(name)
    if preset is None:
        raise ProviderInitError(f"Unknown LLM provider: {name}")
    data = {
        "name": name,
        "api_key": api_key,
        "history_window": settings.LLM_HISTORY_WINDOW,
        "timeout_sec": settings.LLM_HTTP_TIMEOUT_SEC,
        **preset,
        **overrides,
    }
    return OpenAICompatibleProvider(ProviderConfig(**data), transport=transport)
