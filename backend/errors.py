"""Exceptions raised across the orchestration core."""

from typing import Optional


class ProviderInitError(ValueError):
    """A provider client could not be constructed (missing key, unknown tag)."""


class OrchestratorConfigError(RuntimeError):
    """No LLM provider could be configured."""


class AllProvidersFailedError(RuntimeError):
    """Every provider in the attempt list returned an error response."""

    def __init__(self, last_error: Optional[str] = None):
        self.last_error = last_error
        super().__init__(f"All providers failed. Last error: {last_error or 'Unknown error'}")


class SummaryGenerationError(RuntimeError):
    """The provider could not produce a session summary."""
