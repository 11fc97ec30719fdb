from types import SimpleNamespace

import pytest
import requests

from cinematic_dolly.agents.creative import client_veo_google
from cinematic_dolly.agents.creative.client_veo_google import GoogleVeoGenerator, extract_video_uri
from cinematic_dolly.core.credentials import ApiKeyProvider
from cinematic_dolly.core.errors import GenerationError, MissingApiKeyError
from cinematic_dolly.core.state import ImagePayload


class _FakeModels:
    def __init__(self):
        self.calls = []

    def generate_videos(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(name="operations/H1", done=False)


class _FakeOperations:
    def get(self, operation):
        return SimpleNamespace(name=operation.name, done=True)


class _FakeClient:
    instances = []

    def __init__(self, api_key=None):
        self.api_key = api_key
        self.models = _FakeModels()
        self.operations = _FakeOperations()
        _FakeClient.instances.append(self)


@pytest.fixture
def fake_client(monkeypatch):
    _FakeClient.instances = []
    monkeypatch.setattr(client_veo_google.genai, "Client", _FakeClient)
    return _FakeClient


def test_submit_sends_fixed_output_config(fake_client, key_provider):
    generator = GoogleVeoGenerator(key_provider)

    operation = generator.submit("PROMPT", ImagePayload(data=b"AAAA", mime_type="image/png"))

    assert operation.name == "operations/H1"
    call = fake_client.instances[0].models.calls[0]
    assert fake_client.instances[0].api_key == "test-key"
    assert call["model"] == "veo-3.1-fast-generate-preview"
    assert call["prompt"] == "PROMPT"
    assert call["image"].image_bytes == b"AAAA"
    assert call["image"].mime_type == "image/png"
    assert call["config"].number_of_videos == 1
    assert call["config"].resolution == "1080p"
    assert call["config"].aspect_ratio == "9:16"


def test_refresh_uses_operations_api(fake_client, key_provider):
    generator = GoogleVeoGenerator(key_provider)

    operation = generator.refresh(SimpleNamespace(name="operations/H1", done=False))

    assert operation.done is True


def test_client_rebuilt_after_key_change(fake_client, key_provider):
    generator = GoogleVeoGenerator(key_provider)
    generator.refresh(SimpleNamespace(name="op", done=False))
    key_provider.select_key("other-key")
    generator.refresh(SimpleNamespace(name="op", done=False))

    assert [client.api_key for client in fake_client.instances] == ["test-key", "other-key"]


def test_submit_without_key_fails(fake_client):
    generator = GoogleVeoGenerator(ApiKeyProvider())

    with pytest.raises(MissingApiKeyError):
        generator.submit("PROMPT", ImagePayload(data=b"AAAA", mime_type="image/png"))


class _FakeResponse:
    def __init__(self, chunks):
        self._chunks = chunks

    def raise_for_status(self):
        return None

    def iter_content(self, chunk_size=None):
        yield from self._chunks


def test_download_appends_key_as_query_param(monkeypatch, key_provider):
    captured = {}

    def fake_get(url, params=None, stream=None, timeout=None):
        captured.update(url=url, params=params, stream=stream, timeout=timeout)
        return _FakeResponse([b"VIDEO", b"DATA"])

    monkeypatch.setattr(client_veo_google.requests, "get", fake_get)
    generator = GoogleVeoGenerator(key_provider)

    data = generator.download("https://provider/video123?alt=media")

    assert data == b"VIDEODATA"
    assert captured["url"] == "https://provider/video123?alt=media"
    assert captured["params"] == {"key": "test-key"}
    assert captured["stream"] is True


def test_extract_video_uri():
    video = SimpleNamespace(video=SimpleNamespace(uri="https://provider/v"))

    assert extract_video_uri(SimpleNamespace(response=SimpleNamespace(generated_videos=[video]))) == "https://provider/v"
    assert extract_video_uri(SimpleNamespace(response=None, result=SimpleNamespace(generated_videos=[video]))) == "https://provider/v"
    assert extract_video_uri(SimpleNamespace(response=SimpleNamespace(generated_videos=[]))) is None
    assert extract_video_uri(SimpleNamespace(response=None)) is None


class _FailingResponse:
    status_code = 403

    def __init__(self, url):
        self.url = url

    def raise_for_status(self):
        raise requests.HTTPError(f"403 Client Error: Forbidden for url: {self.url}", response=self)


def test_download_http_error_hides_key(monkeypatch, key_provider):
    def fake_get(url, params=None, stream=None, timeout=None):
        return _FailingResponse(f"{url}?key={params['key']}")

    monkeypatch.setattr(client_veo_google.requests, "get", fake_get)
    generator = GoogleVeoGenerator(key_provider)

    with pytest.raises(GenerationError) as excinfo:
        generator.download("https://provider/video123")

    assert excinfo.value.message == "Video download failed: HTTP 403"
    assert "test-key" not in str(excinfo.value)
    assert excinfo.value.__cause__ is None


def test_download_connection_error_hides_key(monkeypatch, key_provider):
    def fake_get(url, params=None, stream=None, timeout=None):
        raise requests.ConnectionError(f"Max retries exceeded with url: {url}?key={params['key']}")

    monkeypatch.setattr(client_veo_google.requests, "get", fake_get)
    generator = GoogleVeoGenerator(key_provider)

    with pytest.raises(GenerationError) as excinfo:
        generator.download("https://provider/video123")

    assert excinfo.value.message == "Video download failed: ConnectionError"
    assert "test-key" not in str(excinfo.value)
