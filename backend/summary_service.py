"""Session summary and recommendations export."""

import asyncio
import logging
from typing import Iterable, Optional

from errors import SummaryGenerationError
from llm_providers import ChatProvider, is_llm_error, parse_llm_error
from schemas import ChatHistoryItem, SessionSummary

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = "You are an expert psychologist writing session summaries."
RECOMMENDATIONS_SYSTEM_PROMPT = "You are an expert psychologist providing therapeutic recommendations."
SUMMARY_MAX_TOKENS = 500
RECOMMENDATIONS_MAX_TOKENS = 400
SUMMARY_TEMPERATURE = 0.7


def format_transcript(messages: Iterable[ChatHistoryItem]) -> str:
    return "\n\n".join(
        f"{'Client' if msg.role == 'client' else 'Therapist'}: {msg.content}" for msg in messages
    )


def average_coherence(scores: Optional[list[float]]) -> float:
    return sum(scores) / len(scores) if scores else 0.0


def build_summary_prompt(transcript: str, avg_coherence: float) -> str:
    return (
        "You are an expert psychologist. Summarize this therapeutic session in 3-4 paragraphs. Focus on:\n"
        "1. Main themes and concerns discussed\n"
        "2. Client's emotional state and attachment patterns (if relevant)\n"
        "3. Progress and insights gained\n"
        f"4. Overall session quality (avg coherence: {avg_coherence:.3f})\n"
        "\n"
        "Session transcript:\n"
        f"{transcript}\n"
        "\n"
        "Provide a professional, compassionate summary."
    )


def build_recommendations_prompt(transcript: str) -> str:
    return (
        "Based on this therapeutic session, provide 4-6 specific, actionable recommendations for the "
        "client's continued growth. Use SFH and attachment theory principles.\n"
        "\n"
        "Session transcript:\n"
        f"{transcript}\n"
        "\n"
        "Format as a numbered list. Be specific and practical."
    )


async def generate_session_summary(
    provider: ChatProvider,
    messages: list[ChatHistoryItem],
    coherence_scores: Optional[list[float]] = None,
) -> SessionSummary:
    if not messages:
        raise ValueError("No messages to summarize")

    transcript = format_transcript(messages)
    avg = average_coherence(coherence_scores)

    summary_resp, rec_resp = await asyncio.gather(
        provider.complete(
            [
                {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                {"role": "user", "content": build_summary_prompt(transcript, avg)},
            ],
            SUMMARY_MAX_TOKENS,
            SUMMARY_TEMPERATURE,
        ),
        provider.complete(
            [
                {"role": "system", "content": RECOMMENDATIONS_SYSTEM_PROMPT},
                {"role": "user", "content": build_recommendations_prompt(transcript)},
            ],
            RECOMMENDATIONS_MAX_TOKENS,
            SUMMARY_TEMPERATURE,
        ),
    )

    for resp in (summary_resp, rec_resp):
        if is_llm_error(resp.raw_response):
            detail = parse_llm_error(resp.raw_response)
            logger.error("summary generation failed provider=%s detail=%s", resp.provider, detail)
            raise SummaryGenerationError(f"Failed to generate summary: {detail}")

    logger.info("session summary generated messages=%d avg_coherence=%.3f", len(messages), avg)
    return SessionSummary(summary=summary_resp.raw_response, recommendations=rec_resp.raw_response)
