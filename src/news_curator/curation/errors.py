from __future__ import annotations


class CurationError(Exception):
    """Base class for failures surfaced by a curation run."""


class NoSourcesError(CurationError):
    def __init__(self, category_id: str) -> None:
        super().__init__(f"No sources found for category ID: {category_id}.")
        self.category_id = category_id


class ExtractionFailedError(CurationError):
    def __init__(self, category_name: str) -> None:
        super().__init__(
            f"Curation failed for {category_name}. "
            "The AI agent could not generate valid content from the sources."
        )
        self.category_name = category_name


class CurationTimeoutError(CurationError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"Curation timed out: the AI agent did not respond within {timeout:g}s.")
        self.timeout = timeout


class AgentError(CurationError):
    """Raised when the agent call fails or returns nothing usable."""
