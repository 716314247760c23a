"""Tests for the public processing API."""

import io

import pytest
from pydantic import ValidationError

from vsixproc.api import ProcessingResult, process_extension
from vsixproc.codes import IngestCode
from vsixproc.contracts import MAX_CONTENT_SIZE, PublishOptions
from vsixproc.kernel.errors import IngestError, MalformedArchive, PayloadTooLarge
from vsixproc.kernel.resources import ResourceKind

from license_texts import MIT_TEXT


def test_process_extension_end_to_end(basic_vsix):
    result = process_extension(io.BytesIO(basic_vsix))
    assert isinstance(result, ProcessingResult)
    assert result.metadata.extension_id == "acme.hello-world"
    assert result.metadata.version == "1.2.3"
    assert result.metadata.engines == ["vscode@^1.50.0"]
    assert result.resource(ResourceKind.README).content == b"# Hello"
    assert result.resource(ResourceKind.ICON).name == "icon.png"
    assert result.resource(ResourceKind.WEB_RESOURCE) is None
    assert result.dependencies == []
    assert result.bundled_extensions == []


def test_license_rewrite_reaches_result(make_vsix):
    data = make_vsix(
        {"extension/LICENSE.txt": MIT_TEXT},
        manifest={"name": "x", "publisher": "p", "license": "SEE LICENSE IN LICENSE.txt"},
    )
    result = process_extension(data)
    assert result.metadata.license == "MIT"
    assert result.resource(ResourceKind.LICENSE).extension is result.metadata


def test_summary_is_json_friendly_and_stable(basic_vsix):
    first = process_extension(basic_vsix).summary()
    second = process_extension(basic_vsix).summary()
    assert first == second
    assert first["fingerprint"].startswith("sha256:")
    assert first["metadata"]["name"] == "hello-world"
    kinds = [entry["kind"] for entry in first["resources"]]
    assert kinds == ["download", "manifest", "readme", "changelog", "license", "icon"]
    assert first["resources"][0]["size"] == len(basic_vsix)
    assert len(first["resources"][0]["sha256"]) == 64


def test_errors_are_ingest_errors(make_vsix):
    with pytest.raises(IngestError) as excinfo:
        process_extension(make_vsix({}))
    assert excinfo.value.code is IngestCode.MANIFEST_MISSING


def test_size_ceiling_option(basic_vsix):
    with pytest.raises(PayloadTooLarge):
        process_extension(basic_vsix, PublishOptions(max_content_size=100))


def test_malformed_archive():
    with pytest.raises(MalformedArchive):
        process_extension(b"PK\x03\x04 truncated")


def test_publish_options_defaults():
    options = PublishOptions()
    assert options.web is False
    assert options.max_content_size == MAX_CONTENT_SIZE == 512 * 1024 * 1024
    assert options.temp_dir is None


@pytest.mark.parametrize("kwargs", [{"max_content_size": 0}, {"unknown": True}])
def test_publish_options_validation(kwargs):
    with pytest.raises(ValidationError):
        PublishOptions(**kwargs)
