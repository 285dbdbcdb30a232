"""
Provider selection, failover and the validate / auto-repair loop.
"""

import logging
from typing import Callable, Optional

from pydantic import BaseModel, Field

from compliance import validate_response
from errors import AllProvidersFailedError, OrchestratorConfigError, ProviderInitError
from llm_providers import PROVIDER_PRESETS, ChatProvider, build_provider, is_llm_error
from schemas import LLMRequest, ProcessResult, ProviderInfo, RepairResult, TherapeuticSession
from telemetry import (
    EVENT_AUTO_REPAIR,
    EVENT_FAILOVER,
    EVENT_VALIDATION,
    append_compliance_telemetry,
)
import settings

logger = logging.getLogger(__name__)

REPAIR_PREAMBLE = "IMPORTANT: Previous response violated SFH axioms. Please correct:"

ProviderFactory = Callable[[str, Optional[str]], ChatProvider]


class OrchestratorConfig(BaseModel):
    """Provider name -> API key, plus an optional provider to try first."""

    api_keys: dict[str, Optional[str]] = Field(default_factory=dict)
    default_provider: Optional[str] = None


def build_repair_prompt(prompt: str, suggestions: list[str]) -> str:
    return f"{prompt}\n\n{REPAIR_PREAMBLE}\n" + "\n".join(suggestions)


class LLMOrchestrator:
    """Routes prompts to configured providers and validates what comes back."""

    def __init__(self, config: OrchestratorConfig, provider_factory: ProviderFactory = build_provider):
        self._providers: dict[str, ChatProvider] = {}

        # Known presets first in registry order, then any extra names.
        names = [n for n in PROVIDER_PRESETS if n in config.api_keys]
        names += [n for n in config.api_keys if n not in names]
        for name in names:
            api_key = config.api_keys.get(name)
            if not api_key:
                continue
            try:
                self._providers[name] = provider_factory(name, api_key)
                logger.info("provider initialized: %s", name)
            except ProviderInitError as exc:
                logger.warning("failed to initialize provider %s: %s", name, exc)

        if not self._providers:
            raise OrchestratorConfigError("At least one LLM provider must be configured")

        self._order = list(self._providers)
        default = config.default_provider
        if default in self._providers:
            self._order.remove(default)
            self._order.insert(0, default)
        elif default:
            logger.warning("default provider %s is not configured; ignoring", default)
        logger.info("provider order: %s", ", ".join(self._order))

    def get_available_providers(self) -> list[str]:
        return list(self._order)

    def get_provider(self, name: Optional[str] = None) -> Optional[ChatProvider]:
        """The named provider, or the first in order when *name* is empty."""
        if not name:
            return self._providers[self._order[0]]
        return self._providers.get(name)

    def describe_providers(self) -> list[ProviderInfo]:
        return [self._providers[name].describe() for name in self._order]

    def _attempt_order(self, preferred_provider: Optional[str]) -> list[str]:
        order = list(self._order)
        if preferred_provider:
            order = [preferred_provider] + [p for p in order if p != preferred_provider]
        return order

    async def process_message(
        self,
        prompt: str,
        session: TherapeuticSession,
        preferred_provider: Optional[str] = None,
    ) -> ProcessResult:
        """Query providers in order until one answers, then validate that answer.

        An answer that fails validation is still returned; only error responses
        cause failover. Raises ``AllProvidersFailedError`` when every provider
        in the attempt list errors.
        """
        attempts = self._attempt_order(preferred_provider)
        last_error: Optional[str] = None

        for index, name in enumerate(attempts):
            provider = self._providers.get(name)
            if provider is None:
                logger.debug("provider %s not configured, skipping", name)
                continue

            logger.info("processing message provider=%s session=%s", name, session.session_id)
            request = LLMRequest(
                prompt=prompt,
                context=session,
                max_tokens=settings.LLM_MAX_TOKENS,
                temperature=settings.LLM_TEMPERATURE,
                topic_tags=list(session.topic_tags),
            )
            try:
                response = await provider.query(request)
            except Exception as exc:
                response = None
                last_error = str(exc) or exc.__class__.__name__
                logger.exception("provider %s raised during query", name)
            else:
                if is_llm_error(response.raw_response):
                    last_error = response.raw_response
                    response = None

            if response is None:
                has_next = any(p in self._providers for p in attempts[index + 1:])
                logger.warning(
                    "provider %s failed: %s%s", name, last_error,
                    "; failing over to next provider" if has_next else "",
                )
                append_compliance_telemetry(
                    EVENT_FAILOVER, {"provider": name, "error": (last_error or "")[:300]}
                )
                continue

            logger.info(
                "response received provider=%s latency_ms=%.0f tokens=%s",
                name, response.latency_ms, response.token_count,
            )
            validation = validate_response(response, session)
            violated = [v.axiom_id for v in validation.violated_axioms]
            logger.info(
                "validation %s coherence=%.3f violations=%s",
                "PASS" if validation.passed else "FAIL", validation.coherence_score, violated or "none",
            )
            append_compliance_telemetry(
                EVENT_VALIDATION,
                {
                    "provider": name,
                    "session_id": session.session_id,
                    "passed": validation.passed,
                    "coherence_score": round(validation.coherence_score, 4),
                    "violated_axioms": violated,
                },
            )
            return ProcessResult(response=response, validation=validation, passed=validation.passed)

        raise AllProvidersFailedError(last_error)

    async def process_with_auto_repair(
        self,
        prompt: str,
        session: TherapeuticSession,
        preferred_provider: Optional[str] = None,
        max_attempts: int = 2,
    ) -> RepairResult:
        """Retry with repair instructions until a response passes or attempts run out.

        Running out of attempts is not an error: the last result is returned with
        ``passed=False``.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        attempts = 0
        result: Optional[ProcessResult] = None
        while attempts < max_attempts:
            attempts += 1
            logger.info("auto-repair attempt %d/%d session=%s", attempts, max_attempts, session.session_id)
            result = await self.process_message(prompt, session, preferred_provider)
            if result.passed:
                break
            if attempts < max_attempts:
                logger.info("response failed validation; adding repair instructions")
                prompt = build_repair_prompt(prompt, result.validation.repair_suggestions)

        append_compliance_telemetry(
            EVENT_AUTO_REPAIR,
            {"session_id": session.session_id, "attempts": attempts, "passed": result.passed},
        )
        return RepairResult(
            response=result.response,
            validation=result.validation,
            passed=result.passed,
            attempts=attempts,
        )


def create_orchestrator_from_env(provider_factory: ProviderFactory = build_provider) -> LLMOrchestrator:
    config = OrchestratorConfig(
        api_keys=settings.provider_api_keys(),
        default_provider=settings.default_provider(),
    )
    return LLMOrchestrator(config, provider_factory=provider_factory)
