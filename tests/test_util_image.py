import base64

import pytest

from cinematic_dolly.agents.creative.util_image import (
    image_payload_from_base64,
    image_payload_from_file,
    image_payload_from_upload,
)


def test_upload_keeps_declared_mime_type():
    payload = image_payload_from_upload(b"AAAA", "image/jpeg", "room.png")

    assert payload.mime_type == "image/jpeg"
    assert payload.data == b"AAAA"
    assert payload.base64 == base64.b64encode(b"AAAA").decode()


def test_mime_type_guessed_from_filename():
    assert image_payload_from_upload(b"AAAA", None, "room.jpg").mime_type == "image/jpeg"
    assert image_payload_from_upload(b"AAAA").mime_type == "image/png"


def test_non_image_rejected():
    with pytest.raises(ValueError):
        image_payload_from_upload(b"%PDF", "application/pdf", "plan.pdf")


def test_empty_upload_rejected():
    with pytest.raises(ValueError):
        image_payload_from_upload(b"", "image/png")


def test_from_file(tmp_path):
    path = tmp_path / "living_room.jpg"
    path.write_bytes(b"JPEGDATA")

    payload = image_payload_from_file(str(path))

    assert payload.mime_type == "image/jpeg"
    assert payload.data == b"JPEGDATA"


def test_from_data_url():
    payload = image_payload_from_base64("data:image/png;base64,QUFBQQ==", None)

    assert payload.data == b"AAAA"
    assert payload.mime_type == "image/png"
