"""
Abstract interface for the advisory model: a best-effort source of texture parameters.
Implementations can be: a local model server (Ollama), or a null service that is never available.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class AdvisoryError(Exception):
    """Advisory call failed: unreachable, timed out, non-2xx, or unusable reply."""
    def __init__(self, message: str, note: str | None = None):
        super().__init__(message)
        self.note = note


@dataclass
class Capabilities:
    available: bool
    models: list[str] = field(default_factory=list)


class AdvisoryService(ABC):
    """
    Suggests texture parameters from free text. Used by the parameter requester, which
    treats every failure mode the same way (fall back to the keyword classifier).
    """

    @abstractmethod
    def list_capabilities(self) -> Capabilities:
        """Lightweight availability probe. Raises AdvisoryError on failure."""
        ...

    @abstractmethod
    def generate(self, instruction: str) -> str:
        """Run one generation and return the raw text. Raises AdvisoryError on failure."""
        ...

    def describe(self) -> str:
        return type(self).__name__


def advisory_status(service: AdvisoryService) -> dict:
    """Probe the service for display: connected + models, or disconnected + error."""
    try:
        caps = service.list_capabilities()
    except AdvisoryError as e:
        return {
            "status": "disconnected",
            "error": str(e),
            "url": service.describe(),
            "note": e.note or "Advisory service is not running or not accessible",
        }
    return {
        "status": "connected" if caps.available else "disconnected",
        "models": list(caps.models),
        "url": service.describe(),
    }
