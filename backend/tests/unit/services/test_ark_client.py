#!/usr/bin/env python3
"""
Unit tests for the ModelArk client and image input normalization.
"""

from unittest.mock import MagicMock

import pytest
import requests

from boothmedia.exceptions import ExtractionError, UpstreamError, ValidationError
from boothmedia.services.generation.ark_client import ArkClient, normalize_image_input
from boothmedia.utils.image_refs import strip_bare_payload_prefix

BASE_URL = "https://ark.example.com/api/v3"


@pytest.mark.unit
class TestNormalizeImageInput:
    @pytest.mark.parametrize(
        "url", ["http://example.com/a.png", "https://example.com/b.jpg?x=1"]
    )
    def test_urls_are_identity(self, url):
        assert normalize_image_input(url) == url

    def test_surrounding_whitespace_is_trimmed(self):
        assert normalize_image_input("  https://example.com/a.png\n") == "https://example.com/a.png"

    def test_data_uri_is_identity(self):
        uri = "data:image/jpeg;base64,/9j/4AAQ"
        assert normalize_image_input(uri) == uri

    def test_bare_payload_gains_prefix_and_strips_back(self):
        payload = "A" * 500
        normalized = normalize_image_input(payload)
        assert normalized == "data:image/png;base64," + payload
        assert strip_bare_payload_prefix(normalized) == payload

    def test_payload_at_threshold_is_rejected(self):
        with pytest.raises(ValidationError):
            normalize_image_input("A" * 100)

    def test_long_string_with_whitespace_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_image_input("A" * 80 + " " + "B" * 80, index=2)
        assert "index 2" in str(exc_info.value)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_is_rejected(self, value):
        with pytest.raises(ValidationError):
            normalize_image_input(value)

    def test_non_image_data_uri_is_rejected(self):
        with pytest.raises(ValidationError):
            normalize_image_input("data:text/plain;base64,SGVsbG8=")


@pytest.mark.unit
class TestArkClient:
    @pytest.fixture
    def session(self):
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        return session

    @pytest.fixture
    def client(self, session):
        return ArkClient(BASE_URL + "/", "secret-key", timeout=12, session=session)

    def test_sets_auth_headers(self, client, session):
        assert session.headers["Authorization"] == "Bearer secret-key"
        assert session.headers["Content-Type"] == "application/json"
        assert client.base_url == BASE_URL

    def test_generate_posts_normalized_request(self, client, session, response_factory):
        session.post.return_value = response_factory(
            json_data={"data": [{"url": "https://cdn.example.com/out.jpeg"}]}
        )
        payload = "Z" * 500

        url = client.generate([payload, "https://example.com/ref.png"], "make it pop", "seedream-x")

        assert url == "https://cdn.example.com/out.jpeg"
        args, kwargs = session.post.call_args
        assert args[0] == BASE_URL + "/images/generations"
        assert kwargs["timeout"] == 12
        body = kwargs["json"]
        assert body["model"] == "seedream-x"
        assert body["prompt"] == "make it pop"
        assert body["image"] == ["data:image/png;base64," + payload, "https://example.com/ref.png"]
        assert body["response_format"] == "url"
        assert body["size"] == "2K"
        assert body["stream"] is False
        assert body["watermark"] is True
        assert body["sequential_image_generation"] == "disabled"

    def test_generate_without_images_omits_image_field(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"image_url": "https://x/y.png"})
        client.generate([], "prompt", "model")
        assert "image" not in session.post.call_args.kwargs["json"]

    def test_invalid_image_never_reaches_upstream(self, client, session):
        with pytest.raises(ValidationError):
            client.generate(["short"], "prompt", "model")
        session.post.assert_not_called()

    def test_server_error_raises_upstream_error(self, client, session, response_factory):
        session.post.return_value = response_factory(status_code=500, text="boom")
        with pytest.raises(UpstreamError) as exc_info:
            client.generate(["https://example.com/a.png"], "prompt", "model")
        assert exc_info.value.status_code == 500
        assert "Upstream Error (500)" in str(exc_info.value)

    def test_transport_error_raises_upstream_error(self, client, session):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(UpstreamError) as exc_info:
            client.generate(["https://example.com/a.png"], "prompt", "model")
        assert exc_info.value.status_code is None

    def test_non_json_success_raises_extraction_error(self, client, session, response_factory):
        session.post.return_value = response_factory(status_code=200, text="<html>")
        with pytest.raises(ExtractionError):
            client.generate(["https://example.com/a.png"], "prompt", "model")

    def test_unknown_shape_raises_extraction_error(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"data": {"nothing": True}})
        with pytest.raises(ExtractionError):
            client.generate(["https://example.com/a.png"], "prompt", "model")


@pytest.mark.unit
class TestStartVideoTask:
    @pytest.fixture
    def session(self):
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        return session

    @pytest.fixture
    def client(self, session):
        return ArkClient(BASE_URL, "key", session=session)

    def test_posts_task_and_returns_id(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"id": "cgt-123"})

        task_id = client.start_video_task(
            "seedance-1-0-pro", "Cinematic movement", image_url="https://img/1.jpg"
        )

        assert task_id == "cgt-123"
        args, kwargs = session.post.call_args
        assert args[0] == BASE_URL + "/contents/generations/tasks"
        assert kwargs["json"] == {
            "model": "seedance-1-0-pro",
            "content": [
                {"type": "text", "text": "Cinematic movement"},
                {"type": "image_url", "image_url": {"url": "https://img/1.jpg"}},
            ],
            "parameters": {"duration": 5, "resolution": "480p", "audio": False},
        }

    def test_reads_nested_result_id(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"Result": {"id": "cgt-9"}})
        assert client.start_video_task("seedance-x", "p") == "cgt-9"

    def test_text_only_task(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"id": "t"})
        client.start_video_task("seedance-x", "p", resolution="720p")
        body = session.post.call_args.kwargs["json"]
        assert body["content"] == [{"type": "text", "text": "p"}]
        assert body["parameters"]["resolution"] == "720p"

    def test_missing_id_raises(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"status": "queued"})
        with pytest.raises(ExtractionError):
            client.start_video_task("seedance-x", "p")

    def test_bare_payload_input_is_wrapped_as_data_uri(self, client, session, response_factory):
        session.post.return_value = response_factory(json_data={"id": "t"})
        payload = "A" * 500

        client.start_video_task("seedance-x", "p", image_url=payload)

        content = session.post.call_args.kwargs["json"]["content"]
        assert content[1] == {
            "type": "image_url",
            "image_url": {"url": "data:image/png;base64," + payload},
        }

    def test_invalid_input_image_never_reaches_upstream(self, client, session):
        with pytest.raises(ValidationError):
            client.start_video_task("seedance-x", "p", image_url="not an image")
        session.post.assert_not_called()
