import io
import os
import zipfile

import boto3
import pytest
from botocore.stub import Stubber

from conftest import (WEBSITE_FILES, FailingFileBackend, FakeStorage,
                      backends_for, make_zip)
from sync_s3_static_python.actions.action_result import ErrorKind
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.backends.file import LocalFileBackend
from sync_s3_static_python.backends.s3 import S3Backend
from sync_s3_static_python.backends.s3.models import S3Model
from sync_s3_static_python.backends.zip import ZipBackend
from sync_s3_static_python.pipeline.pipeline_builder import PipelineBuilder
from sync_s3_static_python.pipeline.pipeline_context import PipelineContext


def create_context(tmp_path, cleanup: bool = False) -> PipelineContext:
    return PipelineContext(source_bucket="src-bucket",
                           source_folder="in/folder",
                           dest_bucket="dest-bucket",
                           download_dir=str(tmp_path),
                           extract_dir=str(tmp_path / "website"),
                           cleanup=cleanup)


@pytest.mark.unit
def test_pipeline_syncs_artifact(tmp_path, storage, backends):
    pipeline = PipelineBuilder.create(create_context(tmp_path))

    result = pipeline.execute_pipeline(backends)

    assert not result.failed
    assert storage.calls == ["list", "fetch", "mirror"]
    assert storage.buckets["dest-bucket"] == WEBSITE_FILES
    assert pipeline.state.artifact_key == "in/folder/app.zip"
    assert pipeline.state.stats.actions_executed == 6
    # Without cleanup the local files remain
    assert (tmp_path / "app.zip").is_file()
    assert (tmp_path / "website" / "index.html").read_bytes() == WEBSITE_FILES["index.html"]
    assert (tmp_path / "website" / "assets" / "app.js").is_file()


@pytest.mark.unit
def test_pipeline_cleanup_removes_local_files(tmp_path, storage, backends):
    pipeline = PipelineBuilder.create(create_context(tmp_path, cleanup=True))

    result = pipeline.execute_pipeline(backends)

    assert not result.failed
    assert not (tmp_path / "app.zip").exists()
    assert (tmp_path / "website").is_dir()
    assert os.listdir(tmp_path / "website") == []
    assert storage.buckets["dest-bucket"] == WEBSITE_FILES


@pytest.mark.unit
def test_prepare_removes_leftovers(tmp_path, storage, backends):
    leftover = tmp_path / "website" / "old" / "leftover.html"
    leftover.parent.mkdir(parents=True)
    leftover.write_text("old")

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends)

    assert not result.failed
    assert not leftover.exists()
    assert sorted(storage.buckets["dest-bucket"].keys()) == ["assets/app.js", "index.html"]


@pytest.mark.unit
def test_fetch_failure_stops_pipeline(tmp_path):
    storage = FakeStorage({"src-bucket": {"in/folder/app.zip": b""}}, fail_on={"fetch"})

    pipeline = PipelineBuilder.create(create_context(tmp_path))
    result = pipeline.execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.CopyFailed
    assert storage.calls == ["list", "fetch"]
    assert not (tmp_path / "website").exists()
    assert pipeline.state.stats.actions_executed == 2


@pytest.mark.unit
def test_missing_artifact(tmp_path):
    storage = FakeStorage({"src-bucket": {"in/folder/": b"", "other/app.zip": b""}})

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.ArtifactNotFound
    assert storage.calls == ["list"]


@pytest.mark.unit
def test_listing_failure(tmp_path):
    storage = FakeStorage(fail_on={"list"})

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.ArtifactNotFound


@pytest.mark.unit
def test_ambiguous_artifact(tmp_path):
    storage = FakeStorage({"src-bucket": {"in/folder/a.zip": b"", "in/folder/b.zip": b""}})

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.AmbiguousArtifact
    assert "in/folder/a.zip" in result.result[0]
    assert storage.calls == ["list"]


@pytest.mark.unit
def test_mkdir_failure(tmp_path, storage):
    backends = backends_for(storage, FailingFileBackend({"make_dir"}))

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends)

    assert result.error_kind == ErrorKind.MkdirFailed
    assert storage.calls == ["list", "fetch"]


@pytest.mark.unit
def test_remove_existing_failure(tmp_path, storage):
    (tmp_path / "website").mkdir()
    backends = backends_for(storage, FailingFileBackend({"remove_tree"}))

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends)

    assert result.error_kind == ErrorKind.RemoveFailed
    assert "mirror" not in storage.calls


@pytest.mark.unit
def test_corrupt_artifact(tmp_path):
    storage = FakeStorage({"src-bucket": {"in/folder/app.zip": b"not a zip"}})

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.UnzipFailed
    assert "mirror" not in storage.calls


@pytest.mark.unit
def test_sync_failure_skips_cleanup(tmp_path):
    storage = FakeStorage({"src-bucket": {"in/folder/app.zip": make_zip(WEBSITE_FILES)}},
                          fail_on={"mirror"})

    result = PipelineBuilder.create(create_context(tmp_path, cleanup=True)).execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.SyncFailed
    assert (tmp_path / "app.zip").is_file()


@pytest.mark.unit
@pytest.mark.parametrize("fail_on", ["remove_file", "clear_dir"])
def test_cleanup_failure(tmp_path, storage, fail_on):
    backends = backends_for(storage, FailingFileBackend({fail_on}))

    result = PipelineBuilder.create(create_context(tmp_path, cleanup=True)).execute_pipeline(backends)

    assert result.error_kind == ErrorKind.RemoveFailed
    assert storage.buckets["dest-bucket"] == WEBSITE_FILES


@pytest.mark.unit
def test_status_lines_are_logged(tmp_path, backends, caplog):
    caplog.set_level("INFO", logger="sync-s3-static")

    PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends)

    messages = [record.getMessage() for record in caplog.records]
    assert any("Copying [app.zip]" in message for message in messages)
    assert any("Action [sync] successful" in message for message in messages)
    assert any("Cleanup was not requested" in message for message in messages)


@pytest.mark.unit
def test_rejected_upload_is_sync_failure(tmp_path, storage):
    client = boto3.client("s3", region_name="us-east-1",
                          aws_access_key_id="testing", aws_secret_access_key="testing")
    backends = BackendsContext(lister=storage,
                               fetcher=storage,
                               mirror=S3Backend(S3Model(), client=client),
                               filesystem=LocalFileBackend(),
                               extractor=ZipBackend())
    with Stubber(client) as stubber:
        stubber.add_response("list_objects_v2", {"IsTruncated": False},
                             {"Bucket": "dest-bucket", "Prefix": "", "MaxKeys": 1000})
        stubber.add_client_error("put_object",
                                 service_error_code="AccessControlListNotSupported",
                                 http_status_code=400)

        result = PipelineBuilder.create(create_context(tmp_path, cleanup=True)).execute_pipeline(backends)

    assert result.error_kind == ErrorKind.SyncFailed
    assert "AccessControlListNotSupported" in result.result[0]
    assert (tmp_path / "app.zip").is_file()


def patched_zip(data: bytes, local_offset: int, central_offset: int, value: int) -> bytes:
    """
    Overwrites a two byte field of the first member in both its local and central headers
    """
    patched = bytearray(data)
    local = patched.find(b"PK\x03\x04")
    central = patched.find(b"PK\x01\x02")
    patched[local + local_offset:local + local_offset + 2] = value.to_bytes(2, "little")
    patched[central + central_offset:central + central_offset + 2] = value.to_bytes(2, "little")
    return bytes(patched)


def deflated_zip(files) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, data in files.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def corrupt_deflate_stream() -> bytes:
    patched = bytearray(deflated_zip({"index.html": b"<html>" * 200}))
    local = patched.find(b"PK\x03\x04")
    name_length = int.from_bytes(patched[local + 26:local + 28], "little")
    extra_length = int.from_bytes(patched[local + 28:local + 30], "little")
    # Final block with the reserved block type
    patched[local + 30 + name_length + extra_length] = 0xFF
    return bytes(patched)


@pytest.mark.unit
@pytest.mark.parametrize("artifact", [
    pytest.param(corrupt_deflate_stream(), id="corrupt-deflate"),
    pytest.param(patched_zip(make_zip(WEBSITE_FILES), 8, 10, 99), id="unknown-compression"),
    pytest.param(patched_zip(make_zip(WEBSITE_FILES), 6, 8, 0x1), id="encrypted"),
])
def test_damaged_artifact_is_unzip_failure(tmp_path, artifact):
    storage = FakeStorage({"src-bucket": {"in/folder/app.zip": artifact}})

    result = PipelineBuilder.create(create_context(tmp_path)).execute_pipeline(backends_for(storage))

    assert result.error_kind == ErrorKind.UnzipFailed
    assert "mirror" not in storage.calls
