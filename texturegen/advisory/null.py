"""Advisory service that is never available. Forces the keyword classifier path."""
from .base import AdvisoryError, AdvisoryService, Capabilities


class NullAdvisoryService(AdvisoryService):

    def list_capabilities(self) -> Capabilities:
        return Capabilities(available=False)

    def generate(self, instruction: str) -> str:
        raise AdvisoryError("advisory service disabled")

    def describe(self) -> str:
        return "disabled"
