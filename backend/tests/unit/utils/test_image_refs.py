#!/usr/bin/env python3
"""
Unit tests for image reference helpers.
"""

import base64

import pytest

from boothmedia.utils.image_refs import (
    decode_image_reference,
    encode_data_uri,
    extract_drive_file_id,
    get_drive_direct_link,
    get_drive_download_link,
    guess_image_mime,
    strip_bare_payload_prefix,
)


@pytest.mark.unit
class TestDecodeImageReference:
    def test_decodes_data_uri(self):
        raw = b"\x89PNG\r\n\x1a\nfake"
        uri = "data:image/png;base64," + base64.b64encode(raw).decode()
        assert decode_image_reference(uri) == raw

    def test_decodes_bare_payload(self):
        raw = b"hello booth"
        assert decode_image_reference(base64.b64encode(raw).decode()) == raw

    def test_rejects_non_base64_data_uri(self):
        with pytest.raises(ValueError):
            decode_image_reference("data:image/svg+xml,<svg/>")

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            decode_image_reference("not base64 at all!")

    def test_encode_then_decode_preserves_bytes(self):
        raw = bytes(range(256))
        assert decode_image_reference(encode_data_uri(raw, "image/jpeg")) == raw


@pytest.mark.unit
class TestDriveLinks:
    @pytest.mark.parametrize(
        "url",
        [
            "https://drive.google.com/file/d/AbC_123-x/view?usp=sharing",
            "https://drive.google.com/open?id=AbC_123-x",
            "https://drive.google.com/uc?export=view&id=AbC_123-x",
        ],
    )
    def test_share_links_become_direct_links(self, url):
        assert extract_drive_file_id(url) == "AbC_123-x"
        assert get_drive_direct_link(url) == "https://lh3.googleusercontent.com/d/AbC_123-x"

    def test_data_uri_passes_through(self):
        uri = "data:image/png;base64,AAAA"
        assert get_drive_direct_link(uri) == uri

    def test_plain_url_passes_through(self):
        url = "https://cdn.example.com/overlay.png"
        assert get_drive_direct_link(url) == url

    def test_empty_reference(self):
        assert get_drive_direct_link(None) == ""
        assert get_drive_direct_link("") == ""

    def test_download_link(self):
        assert (
            get_drive_download_link("file42")
            == "https://drive.google.com/uc?export=download&id=file42"
        )


@pytest.mark.unit
class TestMiscHelpers:
    def test_strip_bare_payload_prefix(self):
        assert strip_bare_payload_prefix("data:image/png;base64,QUJD") == "QUJD"
        assert strip_bare_payload_prefix("https://x/y.png") == "https://x/y.png"

    def test_guess_image_mime(self, image_factory):
        assert guess_image_mime(image_factory(fmt="PNG")) == "image/png"
        assert guess_image_mime(image_factory(fmt="JPEG", mode="RGB")) == "image/jpeg"
        assert guess_image_mime(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
        assert guess_image_mime(b"") == "image/jpeg"
