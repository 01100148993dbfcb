"""Tests for schema document loading."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from arch_scaffold.utils import (
    SchemaLoadError,
    load_json,
    load_json_from_file,
    load_json_from_url,
)


pytestmark = pytest.mark.unit

URL = "https://example.com/schema.json"


def _response(data=None, error=None):
    response = MagicMock()
    response.json.return_value = data
    if error is not None:
        response.json.side_effect = error
    response.raise_for_status.return_value = None
    return response


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestLoadFromFile:
    def test_loads_document(self, schema_file, shop_schema):
        source, data = load_json_from_file(schema_file)
        assert source == str(schema_file)
        assert data == shop_schema

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError, match="File not found"):
            load_json_from_file(tmp_path / "missing.json")

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(SchemaLoadError, match="File not found"):
            load_json_from_file(tmp_path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(SchemaLoadError, match="Invalid JSON"):
            load_json_from_file(path)

    def test_other_extension_still_loads(self, tmp_path):
        path = tmp_path / "schema.txt"
        path.write_text(json.dumps({"language": "python"}), encoding="utf-8")
        assert load_json_from_file(path)[1] == {"language": "python"}


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


class TestLoadFromUrl:
    def test_loads_document(self):
        with patch("arch_scaffold.utils.requests.get", return_value=_response({"a": 1})) as get:
            assert load_json_from_url(URL, timeout=5) == (URL, {"a": 1})
        get.assert_called_once_with(URL, timeout=5)

    def test_body_decides_not_content_type(self):
        response = _response({"language": "python"})
        response.headers = {"content-type": "text/plain"}
        with patch("arch_scaffold.utils.requests.get", return_value=response):
            assert load_json_from_url("https://example.com/schema")[1] == {"language": "python"}

    def test_invalid_url(self):
        with pytest.raises(SchemaLoadError, match="Invalid URL"):
            load_json_from_url("not a url")

    def test_invalid_json_response(self):
        error = requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        with patch("arch_scaffold.utils.requests.get", return_value=_response(error=error)):
            with pytest.raises(SchemaLoadError, match="Invalid JSON response"):
                load_json_from_url(URL)

    @pytest.mark.parametrize(
        "exception, message",
        [
            (requests.exceptions.Timeout(), "Request timeout"),
            (requests.exceptions.ConnectionError(), "Connection error"),
            (requests.exceptions.RequestException("boom"), "Request error"),
        ],
    )
    def test_request_errors(self, exception, message):
        with patch("arch_scaffold.utils.requests.get", side_effect=exception):
            with pytest.raises(SchemaLoadError, match=message):
                load_json_from_url(URL)

    def test_http_error(self):
        response = _response()
        error_response = MagicMock(status_code=404)
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=error_response
        )
        with patch("arch_scaffold.utils.requests.get", return_value=response):
            with pytest.raises(SchemaLoadError, match="HTTP error 404"):
                load_json_from_url(URL)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TestLoadJson:
    def test_requires_a_source(self):
        with pytest.raises(SchemaLoadError, match="Either file_path or url"):
            load_json()

    def test_rejects_both_sources(self, schema_file):
        with pytest.raises(SchemaLoadError, match="Cannot specify both"):
            load_json(file_path=schema_file, url=URL)

    def test_file_source(self, schema_file):
        assert load_json(file_path=schema_file)[1]["projectName"] == "shop"
