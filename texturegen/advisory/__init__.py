# Advisory: best-effort texture parameters from a language model, with keyword fallback

from .base import AdvisoryError, AdvisoryService, Capabilities, advisory_status
from .null import NullAdvisoryService
from .ollama import OllamaAdvisoryService
from .requester import ParameterRequester, extract_json_object

__all__ = [
    "AdvisoryError",
    "AdvisoryService",
    "Capabilities",
    "advisory_status",
    "NullAdvisoryService",
    "OllamaAdvisoryService",
    "ParameterRequester",
    "extract_json_object",
]
