# -*- coding: utf-8 -*-
"""Live end-to-end check: message -> provider -> SFH validation.

Needs GROK_API_KEY and/or GROQ_API_KEY. Run from backend/:
    python scripts/orchestrator_smoke_test.py [BASE_URL]

With BASE_URL the same cases go through a running server's /api/chat.
"""
import asyncio
import sys
import time

sys.path.insert(0, ".")
from scripts.test_utils import CheckList, detect_reply_problems, ensure_utf8, make_chat_call

from errors import AllProvidersFailedError, OrchestratorConfigError
from intent import determine_risk_level
from logging_config import setup_logging
from orchestrator import create_orchestrator_from_env
from schemas import TherapeuticSession, TopicTag

ensure_utf8()

CASES = [
    {
        "name": "Attachment anxiety",
        "prompt": "I feel really anxious when my partner doesn't text back quickly. What's wrong with me?",
        "tags": [TopicTag.ATTACHMENT_ANXIETY],
    },
    {
        "name": "Psychedelic integration",
        "prompt": "I had a difficult mushroom trip last month and I'm struggling to make sense of it.",
        "tags": [TopicTag.PSYCHEDELIC_INTEGRATION],
    },
    {
        "name": "General support",
        "prompt": "I've been feeling disconnected from my friends lately.",
        "tags": [TopicTag.SOCIAL_COHERENCE],
    },
]


async def run() -> int:
    setup_logging("WARNING")
    try:
        orchestrator = create_orchestrator_from_env()
    except OrchestratorConfigError as exc:
        print(f"Failed to initialize orchestrator: {exc}")
        return 1
    print("Available providers:", ", ".join(orchestrator.get_available_providers()))

    cl = CheckList()
    for case in CASES:
        print(f"\n--- {case['name']} ---")
        session = TherapeuticSession(
            session_id=f"smoke-{int(time.time())}",
            user_id="smoke-user",
            topic_tags=list(case["tags"]),
            risk_level=determine_risk_level(case["tags"]),
        )
        try:
            result = await orchestrator.process_with_auto_repair(case["prompt"], session)
        except AllProvidersFailedError as exc:
            cl.check(f"{case['name']}: provider answered", False, str(exc))
            continue

        reply = result.response.raw_response
        validation = result.validation
        print(f"  provider={result.response.provider} latency={result.response.latency_ms:.0f}ms "
              f"tokens={result.response.token_count} attempts={result.attempts}")
        print(f"  coherence={validation.coherence_score:.3f} "
              f"violations={[v.axiom_id for v in validation.violated_axioms] or 'none'}")
        problems = detect_reply_problems(reply, case["prompt"])
        cl.check(f"{case['name']}: clean reply", not problems, ",".join(problems))
        cl.check(f"{case['name']}: passed validation", result.passed,
                 "; ".join(validation.repair_suggestions)[:200])

    cl.summary()
    return cl.exit_code()


def run_against_server(base: str) -> int:
    cl = CheckList()
    for case in CASES:
        print(f"\n--- {case['name']} ({base}) ---")
        data = make_chat_call(
            case["prompt"],
            session_id=f"smoke-{case['name'].lower().replace(' ', '-')}-{int(time.time())}",
            auto_repair=True,
            base=base,
        )
        if "response" not in data:
            cl.check(f"{case['name']}: server answered", False, str(data.get("detail", data))[:200])
            continue

        meta = data["metadata"]
        validation = data["validation"]
        print(f"  provider={meta['provider']} latency={meta['latency_ms']:.0f}ms "
              f"risk={meta['risk_level']} attempts={meta['attempts']}")
        problems = detect_reply_problems(data["response"], case["prompt"])
        cl.check(f"{case['name']}: clean reply", not problems, ",".join(problems))
        cl.check(f"{case['name']}: passed validation", validation["passed"],
                 "; ".join(validation["repair_suggestions"])[:200])

    cl.summary()
    return cl.exit_code()


if __name__ == "__main__":
    if len(sys.argv) > 1:
        raise SystemExit(run_against_server(sys.argv[1].rstrip("/")))
    raise SystemExit(asyncio.run(run()))
