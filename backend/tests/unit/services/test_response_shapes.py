#!/usr/bin/env python3
"""
Unit tests for upstream response shape decoding.
"""

import pytest

from boothmedia.exceptions import ExtractionError
from boothmedia.services.generation.response_shapes import (
    RESPONSE_SHAPES,
    diagnostic_dump,
    extract_result_url,
)

URL = "https://cdn.example.com/result.jpeg"


@pytest.mark.unit
class TestExtractResultUrl:
    @pytest.mark.parametrize(
        "body",
        [
            {"data": {"image_urls": [URL]}},
            {"data": [{"url": URL}]},
            {"data": [{"image_url": URL}]},
            {"data": {"url": URL}},
            {"image_url": URL},
        ],
        ids=[name for name, _ in RESPONSE_SHAPES],
    )
    def test_each_known_shape(self, body):
        assert extract_result_url(body) == URL

    def test_first_matching_shape_wins(self):
        body = {"data": {"image_urls": ["first"], "url": "second"}, "image_url": "third"}
        assert extract_result_url(body) == "first"

    def test_empty_values_fall_through(self):
        body = {"data": [{"url": "", "image_url": URL}]}
        assert extract_result_url(body) == URL

    @pytest.mark.parametrize(
        "body",
        [{}, {"data": []}, {"data": {"image_urls": []}}, {"result": URL}, [URL], None],
    )
    def test_unknown_shape_raises_with_diagnostic(self, body):
        with pytest.raises(ExtractionError) as exc_info:
            extract_result_url(body)
        assert exc_info.value.diagnostic == diagnostic_dump(body)


@pytest.mark.unit
class TestDiagnosticDump:
    def test_truncates(self):
        body = {"blob": "x" * 5000}
        assert len(diagnostic_dump(body)) == 1200
        assert len(diagnostic_dump(body, limit=50)) == 50

    def test_handles_unserializable_values(self):
        assert "object" in diagnostic_dump({"value": object()})
