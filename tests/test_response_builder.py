"""
Tests for HTTP response construction.
"""

import json

from image_on_demand.entities import ResolvedImage
from image_on_demand.handlers import ResponseBuilder


def test_public_url_inside_images_dir(tmp_path):
    builder = ResponseBuilder(tmp_path, "/files")
    assert builder.public_url_for(str(tmp_path / "a.png")) == "/files/a.png"
    assert builder.public_url_for(str(tmp_path / "sub" / "b.png")) == "/files/sub/b.png"


def test_public_url_outside_images_dir(tmp_path):
    builder = ResponseBuilder(tmp_path / "images", "/files/")
    outside = str(tmp_path / "elsewhere.png")
    assert builder.public_url_for(outside) == outside


def test_json_body(tmp_path):
    builder = ResponseBuilder(tmp_path, "/files/")
    resolved = ResolvedImage(path=str(tmp_path / "a.png"), size=10, mime_type="image/png")

    response = builder.build(resolved, wants_json=True)

    assert response.media_type == "application/json"
    assert json.loads(response.body) == {"publicUrl": "/files/a.png"}


def test_binary_headers(tmp_path):
    image = tmp_path / "a.png"
    image.write_bytes(b"0123456789")
    builder = ResponseBuilder(tmp_path)

    response = builder.build(ResolvedImage(path=str(image), size=10, mime_type="image/png"), wants_json=False)

    assert response.headers["content-length"] == "10"
    assert response.media_type == "image/png"
