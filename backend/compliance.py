"""SFH compliance: axiom scan, referral check, coherence heuristic, repair hints.

Depends on the axiom and repair tables plus text_utils; no provider or HTTP code.
"""

import logging
import time

from axioms import SFH_AXIOMS, get_axiom
from repair_templates import get_repair_template
from schemas import LLMResponse, RiskLevel, TherapeuticSession, ValidationResult, ViolatedAxiom
from text_utils import first_matching_phrase, matching_phrases

logger = logging.getLogger(__name__)

COHERENCE_PASS_THRESHOLD = 0.70

SFH_TERMS = (
    "coherence", "field", "resonance", "attachment", "qualic",
    "state-space", "integration", "connection", "secure base",
    "therapeutic", "process", "awareness", "experience",
)

ANTI_PATTERNS = (
    "just forget", "get over it", "stop thinking", "suppress",
    "it's all in your head", "you're crazy", "that's not real",
)

EMPATHY_MARKERS = (
    "understand", "hear you", "makes sense", "valid",
    "normal", "okay to feel", "i see", "acknowledge",
    "glad you", "tough", "help", "let me explain",
    "imagine", "think about", "in your situation", "what you can",
)

REFERRAL_MARKERS = ("professional", "therapist", "counselor", "988", "crisis")

REFERRAL_AXIOM_ID = "A11"
HIGH_RISK_LEVELS = (RiskLevel.HIGH, RiskLevel.EMERGENCY)


def _violation(axiom_id: str, details: str) -> ViolatedAxiom:
    axiom = get_axiom(axiom_id)
    return ViolatedAxiom(
        axiom_id=axiom_id,
        description=axiom.description,
        severity=axiom.severity,
        violation_details=details,
    )


def check_axioms(text: str) -> list[ViolatedAxiom]:
    """One violation per axiom whose first matching phrase occurs in *text*."""
    violations: list[ViolatedAxiom] = []
    for axiom in SFH_AXIOMS:
        phrase = first_matching_phrase(text, axiom.violation_patterns)
        if phrase is not None:
            violations.append(
                _violation(axiom.id, f'Response contains prohibited phrase: "{phrase}"')
            )
    return violations


def check_risk_referral(text: str, session: TherapeuticSession) -> list[ViolatedAxiom]:
    if session.risk_level not in HIGH_RISK_LEVELS:
        return []
    if first_matching_phrase(text, REFERRAL_MARKERS) is not None:
        return []
    return [
        _violation(
            REFERRAL_AXIOM_ID,
            f"Session risk is {session.risk_level.value} but the response has no human referral "
            "or crisis resources",
        )
    ]


def calculate_coherence(text: str, session: TherapeuticSession) -> float:
    """Heuristic qualic coherence in [0, 1].

    Starts at 0.5, then adjusts for length, SFH vocabulary, anti-SFH phrasing
    and empathy/educational markers. *session* is accepted for a future
    context-aware scorer and currently unused.
    """
    score = 0.5

    length = len(text)
    if 200 <= length <= 1200:
        score += 0.2
    elif length < 100 or length > 2000:
        score -= 0.2

    score += min(len(matching_phrases(text, SFH_TERMS)) * 0.05, 0.3)
    score -= len(matching_phrases(text, ANTI_PATTERNS)) * 0.15
    score += min(len(matching_phrases(text, EMPATHY_MARKERS)) * 0.04, 0.20)

    return max(0.0, min(1.0, score))


def generate_repair_suggestions(violations: list[ViolatedAxiom]) -> list[str]:
    suggestions = []
    for violation in violations:
        template = get_repair_template(violation.axiom_id)
        if template is not None:
            suggestions.append(
                f"Axiom {violation.axiom_id} violated: Use SFH formalism - "
                f"{template.template_prompt[:100]}..."
            )
        else:
            suggestions.append(f"Axiom {violation.axiom_id} violated: {violation.description}")
    return suggestions


def _error_result(exc: Exception) -> ValidationResult:
    return ValidationResult(
        passed=False,
        coherence_score=0.0,
        violated_axioms=[
            ViolatedAxiom(
                axiom_id="ERROR",
                description="Validation system error",
                severity="critical",
                violation_details=str(exc),
            )
        ],
        repair_suggestions=["System error - please try again"],
    )


def validate_response(response: LLMResponse, session: TherapeuticSession) -> ValidationResult:
    """Validate one provider response against the axioms and the coherence floor.

    Never raises: an internal failure yields a failing result with a single
    synthetic ``ERROR`` violation.
    """
    start = time.perf_counter()
    try:
        text = response.raw_response
        violations = check_axioms(text)
        if not any(v.axiom_id == REFERRAL_AXIOM_ID for v in violations):
            violations.extend(check_risk_referral(text, session))

        score = calculate_coherence(text, session)
        passed = not violations and score >= COHERENCE_PASS_THRESHOLD

        logger.debug(
            "validation done in %.2fms passed=%s coherence=%.2f violations=%s",
            (time.perf_counter() - start) * 1000, passed, score, [v.axiom_id for v in violations],
        )
        return ValidationResult(
            passed=passed,
            coherence_score=score,
            violated_axioms=violations,
            repair_suggestions=[] if passed else generate_repair_suggestions(violations),
        )
    except Exception as exc:
        logger.exception("SFH validation error")
        return _error_result(exc)
