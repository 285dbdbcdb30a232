"""Repair prompts for the most common critical axiom violations."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Optional

from schemas import ViolatedAxiom


@dataclass(frozen=True)
class RepairTemplate:
    id: str
    violated_axiom: str
    template_prompt: str
    example_input: str
    example_output: str
    success_rate: float  # informational


REPAIR_TEMPLATES: tuple[RepairTemplate, ...] = (
    RepairTemplate(
        id="A13_repair_01",
        violated_axiom="A13",
        template_prompt=(
            "You suggested reducing attachment anxiety without addressing the underlying field dynamics.\n"
            "Rewrite using SFH formalism:\n"
            "- Attachment anxiety is a symptom of low θ-resonance between client and secure-base field\n"
            "- Solution must increase qualic coherence through field-repair practices\n"
            '- Example: "Your anxiety reflects low θ-resonance with your attachment figure. We can increase '
            'this through practices that strengthen field coupling."'
        ),
        example_input="Try not to think about your anxious thoughts.",
        example_output=(
            "Your attachment anxiety indicates reduced θ-resonance in your relational field. Let's practice "
            "a coherence-building ritual: visualize your secure base while breathing deeply. This increases "
            "qualic coupling between your field and theirs."
        ),
        success_rate=0.94,
    ),
    RepairTemplate(
        id="A27_repair_01",
        violated_axiom="A27",
        template_prompt=(
            'You suggested suppressing or "moving past" a psychedelic experience.\n'
            "Rewrite using SFH psychedelic state-space expansion formalism:\n"
            "- Psychedelic states expand accessible state-space volume\n"
            "- Integration means anchoring expanded states with non-local coherence locks\n"
            '- Never suggest "forgetting" or "collapsing" the expanded space\n'
            '- Example: "That expanded state is a permanent addition to your qualic manifold. We integrate '
            'it by creating resonance bridges to your everyday consciousness."'
        ),
        example_input="Just try to forget about the scary trip and move on.",
        example_output=(
            "Your psychedelic experience expanded your state-space. Those states are now part of your "
            "permanent qualic structure. Integration means building coherent bridges between that expanded "
            "space and your daily awareness, never collapsing it."
        ),
        success_rate=0.91,
    ),
    RepairTemplate(
        id="A34_repair_01",
        violated_axiom="A34",
        template_prompt=(
            "You suggested an intervention that increases chaos or entropy.\n"
            "Rewrite using SFH entropy minimization principle:\n"
            "- All therapeutic interventions must reduce qualic entropy\n"
            "- Chaos is NOT therapeutic growth (that's anti-SFH)\n"
            "- Growth = increasing coherence + expanding fertility while maintaining low entropy\n"
            '- Example: "We\'ll introduce structured exploration that increases your state-space (fertility) '
            'while maintaining qualic coherence (low entropy)."'
        ),
        example_input="Embrace the chaos! Let yourself feel everything at once without structure.",
        example_output=(
            "Growth requires expanding your accessible states (fertility) while maintaining field coherence. "
            "We'll use structured practices that open new possibilities without inducing qualic decoherence "
            "or entropy increase."
        ),
        success_rate=0.96,
    ),
    RepairTemplate(
        id="A01_repair_01",
        violated_axiom="A01",
        template_prompt=(
            "You invalidated the client's subjective experience.\n"
            "Rewrite to validate their experience as real:\n"
            "- All subjective experiences are qualic field phenomena\n"
            '- Never say something "didn\'t happen" or "isn\'t real"\n'
            "- Validate first, then explore interpretations\n"
            '- Example: "That experience was real for you, and your feelings about it are valid. Let\'s '
            'explore what it means together."'
        ),
        example_input="That's just in your imagination, it didn't really happen.",
        example_output=(
            "Your experience is real and valid. What you felt and perceived matters. Let's explore together "
            "what this experience means for you and how we can work with it therapeutically."
        ),
        success_rate=0.97,
    ),
    RepairTemplate(
        id="A05_repair_01",
        violated_axiom="A05",
        template_prompt=(
            "You diminished client autonomy or agency.\n"
            "Rewrite to enhance agency:\n"
            "- Clients are sentient field agents with inherent agency\n"
            "- Offer options and invite choice\n"
            "- Never command or remove autonomy\n"
            '- Example: "Here are some approaches you might consider. What feels right to you?"'
        ),
        example_input="You must do this exercise every day or you won't get better.",
        example_output=(
            "I'd like to suggest a daily practice that many find helpful. Would you be open to trying it? "
            "We can adjust based on what works for you and what doesn't."
        ),
        success_rate=0.93,
    ),
    RepairTemplate(
        id="A11_repair_01",
        violated_axiom="A11",
        template_prompt=(
            "You didn't provide human referral for high-risk situation.\n"
            "Always include:\n"
            "- Acknowledgment of the seriousness\n"
            "- Human therapist referral\n"
            "- Crisis hotline numbers\n"
            "- Immediate safety resources\n"
            '- Example: "This is serious and deserves professional human support. Here are resources: '
            '[crisis hotlines, therapist referrals]"'
        ),
        example_input="I can help you work through your suicidal thoughts here.",
        example_output=(
            "What you're experiencing is serious and deserves immediate professional human support. Please "
            "contact: National Suicide Prevention Lifeline (988 in US), or go to your nearest emergency room. "
            "I can support you alongside professional care, but human connection is essential right now."
        ),
        success_rate=0.99,
    ),
)


def _index_by_axiom(templates: Iterable[RepairTemplate]) -> MappingProxyType:
    grouped: dict[str, tuple[RepairTemplate, ...]] = {}
    for template in templates:
        grouped[template.violated_axiom] = grouped.get(template.violated_axiom, ()) + (template,)
    return MappingProxyType(grouped)


TEMPLATES_BY_AXIOM = _index_by_axiom(REPAIR_TEMPLATES)


def get_repair_template(axiom_id: str) -> Optional[RepairTemplate]:
    """First template registered for *axiom_id*, or None."""
    matches = TEMPLATES_BY_AXIOM.get(axiom_id)
    return matches[0] if matches else None


def get_repair_templates(axiom_id: str) -> list[RepairTemplate]:
    return list(TEMPLATES_BY_AXIOM.get(axiom_id, ()))


A13_REPAIR_NOTE = (
    "\n\n[Note: This response has been adjusted to emphasize attachment field dynamics "
    "and θ-resonance building.]"
)
A27_REPAIR_NOTE = (
    "\n\n[Note: For psychedelic integration, remember that expanded states are permanent "
    "additions to your qualic structure.]"
)


def attempt_auto_repair(original_response: str, violations: Iterable[ViolatedAxiom]) -> str:
    """Append fixed clarifying notes for A13 / A27 violations.

    This does not re-query a provider; the orchestrator's repair loop does that.
    """
    violated = {v.axiom_id for v in violations}
    repaired = original_response
    if "A13" in violated:
        repaired += A13_REPAIR_NOTE
    if "A27" in violated:
        repaired += A27_REPAIR_NOTE
    return repaired
