"""
Ollama-backed advisory service. GET /api/tags to probe, POST /api/generate (non-streaming)
to run the instruction. Every failure is re-raised as AdvisoryError with a diagnostic note.
"""
import logging

from ..api_client import APIError, api_request
from .base import AdvisoryError, AdvisoryService, Capabilities

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama3.2"
PROBE_TIMEOUT_SECONDS = 5.0
GENERATE_TIMEOUT_SECONDS = 30.0


def _note_for(e: APIError, model: str) -> str:
    if e.is_timeout:
        return "Ollama request timed out"
    if e.status_code == 404:
        return f"Ollama API endpoint not found - check if {model} is installed (ollama pull {model})"
    if e.is_connection_refused:
        return "Ollama is not running. Start it with: ollama serve"
    return "Ollama error"


class OllamaAdvisoryService(AdvisoryService):

    def __init__(
        self,
        url: str = DEFAULT_URL,
        model: str = DEFAULT_MODEL,
        *,
        probe_timeout: float = PROBE_TIMEOUT_SECONDS,
        generate_timeout: float = GENERATE_TIMEOUT_SECONDS,
    ):
        self.url = url
        self.model = model
        self.probe_timeout = probe_timeout
        self.generate_timeout = generate_timeout

    def describe(self) -> str:
        return self.url

    def list_capabilities(self) -> Capabilities:
        try:
            data = api_request(self.url, "GET", "/api/tags", timeout=self.probe_timeout)
        except APIError as e:
            raise AdvisoryError(str(e), note=_note_for(e, self.model)) from e
        models = data.get("models")
        if not isinstance(models, list):
            return Capabilities(available=False)
        names = [m.get("name", "") if isinstance(m, dict) else str(m) for m in models]
        return Capabilities(available=bool(names), models=names)

    def generate(self, instruction: str) -> str:
        payload = {"model": self.model, "prompt": instruction, "stream": False}
        try:
            data = api_request(self.url, "POST", "/api/generate", data=payload, timeout=self.generate_timeout)
        except APIError as e:
            raise AdvisoryError(str(e), note=_note_for(e, self.model)) from e
        text = data.get("response")
        if not isinstance(text, str) or not text.strip():
            raise AdvisoryError("Ollama returned an empty response", note="empty response")
        logger.debug("Ollama response received (%d chars)", len(text))
        return text
