"""Shared fixtures: scripted Veo fake, progress recorder, temp video store."""

from types import SimpleNamespace

import pytest

from cinematic_dolly.core.credentials import ApiKeyProvider
from cinematic_dolly.core.state import ImagePayload
from cinematic_dolly.storage.video_store import VideoStore


def make_operation(name="H1", done=False, uris=None, error=None):
    """Operation shaped like google-genai's GenerateVideosOperation."""
    response = None
    if uris is not None:
        response = SimpleNamespace(
            generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri)) for uri in uris]
        )
    return SimpleNamespace(name=name, done=done, response=response, error=error)


class FakeVeoGenerator:
    """Replays a fixed sequence of refresh results (operations or exceptions)."""

    def __init__(self, submitted, refreshes=(), videos=None, submit_error=None):
        self.submitted = submitted
        self.refreshes = list(refreshes)
        self.videos = videos or {}
        self.submit_error = submit_error
        self.submit_calls = []
        self.refresh_calls = []
        self.download_calls = []

    def submit(self, prompt, image):
        self.submit_calls.append((prompt, image))
        if self.submit_error is not None:
            raise self.submit_error
        return self.submitted

    def refresh(self, operation):
        self.refresh_calls.append(operation)
        result = self.refreshes.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    def download(self, uri):
        self.download_calls.append(uri)
        result = self.videos[uri]
        if isinstance(result, BaseException):
            raise result
        return result


class ProgressRecorder:
    def __init__(self):
        self.reports = []

    def __call__(self, message, percent):
        self.reports.append((message, percent))

    @property
    def percents(self):
        return [percent for _, percent in self.reports]


@pytest.fixture
def image():
    return ImagePayload(data=b"AAAA", mime_type="image/png")


@pytest.fixture
def progress():
    return ProgressRecorder()


@pytest.fixture
def store(tmp_path):
    video_store = VideoStore(str(tmp_path))
    yield video_store
    video_store.close()


@pytest.fixture
def key_provider():
    return ApiKeyProvider(api_key="test-key")


@pytest.fixture
def sleeps():
    """Collects requested sleep durations; pass `sleep=sleeps.append`."""
    return []
