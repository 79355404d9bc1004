"""
Unit tests for advisory parameter derivation (fake services; no network).
"""
import sys
import unittest
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from texturegen.advisory.base import AdvisoryError, AdvisoryService, Capabilities


class FakeAdvisoryService(AdvisoryService):
    """Scripted service: fixed capabilities, fixed reply or error."""

    def __init__(self, text: str = "", *, models=("llama3.2",), capabilities_error=None, generate_error=None):
        self.text = text
        self.models = list(models)
        self.capabilities_error = capabilities_error
        self.generate_error = generate_error
        self.instructions: list[str] = []

    def list_capabilities(self) -> Capabilities:
        if self.capabilities_error:
            raise self.capabilities_error
        return Capabilities(available=bool(self.models), models=self.models)

    def generate(self, instruction: str) -> str:
        self.instructions.append(instruction)
        if self.generate_error:
            raise self.generate_error
        return self.text


GOOD_REPLY = (
    'Here are the parameters:\n'
    '{"colors": ["#102030", "#405060", "#708090"], "pattern": "geometric", '
    '"roughness": 0.4, "contrast": 0.75, "type": "fabric"}\nEnjoy!'
)


class TestParameterRequester(unittest.TestCase):
    """Advisory first, classifier on any failure."""

    def test_advisory_reply_wrapped_in_prose(self):
        from texturegen.advisory.requester import ParameterRequester

        service = FakeAdvisoryService(GOOD_REPLY)
        params, source = ParameterRequester(service).derive_with_source("blue denim")
        self.assertEqual(source, "advisory")
        self.assertEqual(params.colors[0], (0x10, 0x20, 0x30))
        self.assertEqual(params.pattern, "geometric")
        self.assertEqual(params.roughness, 0.4)
        self.assertEqual(params.contrast, 0.75)
        self.assertEqual(params.material, "fabric")

    def test_instruction_embeds_prompt_and_keys(self):
        from texturegen.advisory.requester import ParameterRequester

        service = FakeAdvisoryService(GOOD_REPLY)
        ParameterRequester(service).derive("cracked desert mud")
        self.assertEqual(len(service.instructions), 1)
        instruction = service.instructions[0]
        self.assertIn('"cracked desert mud"', instruction)
        for key in ("colors", "pattern", "roughness", "contrast", "type"):
            self.assertIn(key, instruction)
        self.assertIn('{"colors":["#8B4513","#D2691E","#F4A460"]', instruction)

    def test_fallback_paths_match_classifier(self):
        """Timeout, garbage, missing fields and a failed availability check all yield classify(prompt)."""
        from texturegen.advisory.requester import ParameterRequester
        from texturegen.procedural.classifier import classify

        prompt = "rough stone wall"
        services = [
            FakeAdvisoryService(generate_error=AdvisoryError("timed out", note="Ollama request timed out")),
            FakeAdvisoryService(capabilities_error=AdvisoryError("connection refused")),
            FakeAdvisoryService("I cannot help with that."),
            FakeAdvisoryService("{not json at all}"),
            FakeAdvisoryService('{"colors": ["#111111"], "pattern": "grid"}'),
            FakeAdvisoryService('{"colors": [], "pattern": "grid", "roughness": 0.1, "contrast": 0.5}'),
            FakeAdvisoryService(""),
        ]
        for service in services:
            params, source = ParameterRequester(service).derive_with_source(prompt)
            self.assertEqual(source, "fallback")
            self.assertEqual(params, classify(prompt))

    def test_no_models_skips_generation(self):
        from texturegen.advisory.requester import ParameterRequester

        service = FakeAdvisoryService(GOOD_REPLY, models=())
        params, source = ParameterRequester(service).derive_with_source("metal")
        self.assertEqual(source, "fallback")
        self.assertEqual(params.material, "metal")
        self.assertEqual(service.instructions, [])

    def test_availability_check_disabled(self):
        from texturegen.advisory.requester import ParameterRequester

        service = FakeAdvisoryService(GOOD_REPLY, models=())
        _, source = ParameterRequester(service, probe=False).derive_with_source("metal")
        self.assertEqual(source, "advisory")

    def test_null_service(self):
        from texturegen.advisory import NullAdvisoryService, ParameterRequester
        from texturegen.procedural.classifier import classify

        requester = ParameterRequester(NullAdvisoryService())
        self.assertEqual(requester.derive("grass"), classify("grass"))
        self.assertEqual(ParameterRequester(NullAdvisoryService(), probe=False).derive("grass"), classify("grass"))


class TestExtractJsonObject(unittest.TestCase):

    def test_embedded_object(self):
        from texturegen.advisory.requester import extract_json_object

        self.assertEqual(extract_json_object('Sure! {"a": 1, "b": {"c": 2}} hope that helps'), {"a": 1, "b": {"c": 2}})

    def test_multiline_object(self):
        from texturegen.advisory.requester import extract_json_object

        self.assertEqual(extract_json_object('```json\n{\n  "pattern": "noise"\n}\n```'), {"pattern": "noise"})

    def test_skips_unparseable_braces(self):
        from texturegen.advisory.requester import extract_json_object

        self.assertEqual(extract_json_object('use {braces} like {"x": 2}'), {"x": 2})

    def test_nothing_found(self):
        from texturegen.advisory.requester import extract_json_object

        self.assertIsNone(extract_json_object(""))
        self.assertIsNone(extract_json_object("no json here"))
        self.assertIsNone(extract_json_object("{broken"))


def _response(payload=None, status=200, text=""):
    import requests

    resp = mock.Mock()
    resp.status_code = status
    resp.url = "http://ollama.test"
    resp.text = text
    resp.content = b"{}" if payload is not None else b""
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error", response=resp)
    else:
        resp.raise_for_status.return_value = None
    return resp


class TestOllamaAdvisoryService(unittest.TestCase):
    """Ollama HTTP protocol with requests patched out."""

    def test_tags_then_generate(self):
        from texturegen.advisory import OllamaAdvisoryService, ParameterRequester

        def fake_request(method, url, data=None, headers=None, timeout=None):
            if method == "GET":
                self.assertTrue(url.endswith("/api/tags"))
                self.assertEqual(timeout, 5.0)
                return _response({"models": [{"name": "llama3.2:latest"}]})
            self.assertTrue(url.endswith("/api/generate"))
            self.assertEqual(timeout, 30.0)
            self.assertIn(b'"stream": false', data)
            self.assertIn(b'"model": "llama3.2"', data)
            return _response({"response": GOOD_REPLY})

        service = OllamaAdvisoryService("http://ollama.test/")
        with mock.patch("texturegen.api_client.requests.request", side_effect=fake_request):
            self.assertEqual(service.list_capabilities().models, ["llama3.2:latest"])
            params, source = ParameterRequester(service).derive_with_source("denim")
        self.assertEqual(source, "advisory")
        self.assertEqual(params.pattern, "geometric")

    def test_timeout_becomes_advisory_error(self):
        import requests
        from texturegen.advisory import OllamaAdvisoryService

        service = OllamaAdvisoryService()
        with mock.patch("texturegen.api_client.requests.request", side_effect=requests.exceptions.Timeout("slow")):
            with self.assertRaises(AdvisoryError) as ctx:
                service.generate("anything")
        self.assertEqual(ctx.exception.note, "Ollama request timed out")

    def test_connection_refused_falls_back(self):
        import requests
        from texturegen.advisory import OllamaAdvisoryService, ParameterRequester
        from texturegen.procedural.classifier import classify

        service = OllamaAdvisoryService()
        with mock.patch(
            "texturegen.api_client.requests.request",
            side_effect=requests.exceptions.ConnectionError("refused"),
        ) as patched:
            params, source = ParameterRequester(service).derive_with_source("steel")
        self.assertEqual(source, "fallback")
        self.assertEqual(params, classify("steel"))
        self.assertEqual(patched.call_count, 1)  # no retry

    def test_url_without_scheme_falls_back(self):
        """A mistyped base URL (no http://) fails inside requests before any I/O; still the classifier."""
        from texturegen.advisory import OllamaAdvisoryService, ParameterRequester
        from texturegen.procedural.classifier import classify

        params, source = ParameterRequester(OllamaAdvisoryService("localhost:11434")).derive_with_source("stone")
        self.assertEqual(source, "fallback")
        self.assertEqual(params, classify("stone"))

    def test_other_request_errors_fall_back(self):
        """Broken bodies, bad URLs and redirect loops are advisory failures, not engine faults."""
        import requests
        from texturegen.advisory import OllamaAdvisoryService, ParameterRequester
        from texturegen.procedural.generator import TextureSynthesizer

        errors = [
            requests.exceptions.ChunkedEncodingError("truncated"),
            requests.exceptions.ContentDecodingError("bad gzip"),
            requests.exceptions.InvalidURL("bad url"),
            requests.exceptions.MissingSchema("no schema"),
            requests.exceptions.TooManyRedirects("loop"),
        ]
        synth = TextureSynthesizer(ParameterRequester(OllamaAdvisoryService()))
        for error in errors:
            with mock.patch("texturegen.api_client.requests.request", side_effect=error):
                buffer, source = synth.synthesize_with_source("stone", 8, 8)
            self.assertEqual(source, "fallback", type(error).__name__)
            self.assertEqual(buffer.shape, (8, 8, 4))

    def test_request_errors_become_api_error(self):
        import requests
        from texturegen.api_client import APIError, api_request

        with mock.patch(
            "texturegen.api_client.requests.request",
            side_effect=requests.exceptions.ChunkedEncodingError("truncated"),
        ) as patched:
            with self.assertRaises(APIError) as ctx:
                api_request("http://ollama.test", "GET", "/api/tags", timeout=5)
        self.assertEqual(ctx.exception.path, "/api/tags")
        self.assertIsNone(ctx.exception.status_code)
        self.assertEqual(patched.call_count, 1)

    def test_missing_model_404(self):
        from texturegen.advisory import OllamaAdvisoryService

        service = OllamaAdvisoryService(model="llama3.2")
        with mock.patch("texturegen.api_client.requests.request", return_value=_response(status=404, text="model not found")):
            with self.assertRaises(AdvisoryError) as ctx:
                service.generate("anything")
        self.assertIn("ollama pull llama3.2", ctx.exception.note)

    def test_empty_models(self):
        from texturegen.advisory import OllamaAdvisoryService

        service = OllamaAdvisoryService()
        with mock.patch("texturegen.api_client.requests.request", return_value=_response({"models": []})):
            self.assertFalse(service.list_capabilities().available)
        with mock.patch("texturegen.api_client.requests.request", return_value=_response({"status": "ok"})):
            self.assertFalse(service.list_capabilities().available)

    def test_empty_generation(self):
        from texturegen.advisory import OllamaAdvisoryService

        service = OllamaAdvisoryService()
        with mock.patch("texturegen.api_client.requests.request", return_value=_response({"response": "  "})):
            with self.assertRaises(AdvisoryError):
                service.generate("anything")


class TestAdvisoryStatus(unittest.TestCase):

    def test_connected(self):
        from texturegen.advisory import advisory_status

        status = advisory_status(FakeAdvisoryService(models=("llama3.2",)))
        self.assertEqual(status["status"], "connected")
        self.assertEqual(status["models"], ["llama3.2"])

    def test_disconnected(self):
        from texturegen.advisory import NullAdvisoryService, advisory_status

        status = advisory_status(FakeAdvisoryService(capabilities_error=AdvisoryError("refused", note="Ollama is not running")))
        self.assertEqual(status["status"], "disconnected")
        self.assertEqual(status["error"], "refused")
        self.assertEqual(status["note"], "Ollama is not running")
        self.assertEqual(advisory_status(NullAdvisoryService())["status"], "disconnected")


if __name__ == "__main__":
    unittest.main()
