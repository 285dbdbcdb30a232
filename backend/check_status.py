"""
Checks provider configuration and, optionally, a running server's health.

Usage: python check_status.py [BASE_URL]
"""

import sys

import httpx

from errors import OrchestratorConfigError
from orchestrator import create_orchestrator_from_env
import settings


def main(argv: list[str]) -> int:
    for name, value in settings.provider_api_keys().items():
        state = "set" if value else "missing"
        print(f"{settings.PROVIDER_KEY_ENV[name]}: {state}")

    try:
        orchestrator = create_orchestrator_from_env()
    except OrchestratorConfigError as exc:
        print(f"Orchestrator not available: {exc}")
        return 1
    print("Provider order:", ", ".join(orchestrator.get_available_providers()))

    if len(argv) > 1:
        base = argv[1].rstrip("/")
        with httpx.Client(timeout=15.0) as client:
            resp = client.get(f"{base}/api/health")
            resp.raise_for_status()
            data = resp.json()
            print("Server status:", data.get("status"))
            print("Server providers:", ", ".join(data.get("providers") or []))
            print("Active sessions:", data.get("sessions"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
