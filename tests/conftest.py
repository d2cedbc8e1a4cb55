import io
import os
import zipfile
from typing import Dict, List, Optional, Set

import pytest
from botocore.exceptions import ClientError

from sync_s3_static_python.backends.backend import (DirectoryMirror,
                                                    MirrorReport,
                                                    ObjectFetcher,
                                                    ObjectLister)
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.backends.file import LocalFileBackend
from sync_s3_static_python.backends.zip import ZipBackend


def make_zip(files: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in files.items():
            archive.writestr(name, data)
    return buffer.getvalue()


def client_error(operation: str, code: str = "500") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{operation} failed"}}, operation)


class FakeStorage(ObjectLister, ObjectFetcher, DirectoryMirror):
    """
    In memory buckets, records every call made against them
    """
    def __init__(self, buckets: Optional[Dict[str, Dict[str, bytes]]] = None,
                 fail_on: Optional[Set[str]] = None):
        self.buckets: Dict[str, Dict[str, bytes]] = buckets or {}
        self.fail_on: Set[str] = fail_on or set()
        self.calls: List[str] = []

    @staticmethod
    def backend_name() -> str:
        return "fake"

    def list_objects(self, bucket: str, prefix: str) -> List[str]:
        self.calls.append("list")
        if "list" in self.fail_on:
            raise client_error("ListObjectsV2")
        return [key for key in self.buckets.get(bucket, {}) if key.startswith(prefix)]

    def fetch_object(self, bucket: str, key: str, to_path: str) -> None:
        self.calls.append("fetch")
        if "fetch" in self.fail_on or key not in self.buckets.get(bucket, {}):
            raise client_error("GetObject", "404")
        with open(to_path, "wb") as f:
            f.write(self.buckets[bucket][key])

    def mirror(self, local_dir: str, bucket: str) -> MirrorReport:
        self.calls.append("mirror")
        if "mirror" in self.fail_on:
            raise client_error("PutObject")
        local: Dict[str, bytes] = {}
        for root, _, names in os.walk(local_dir):
            for name in names:
                full_path = os.path.join(root, name)
                with open(full_path, "rb") as f:
                    local[os.path.relpath(full_path, local_dir).replace(os.sep, "/")] = f.read()
        existing = self.buckets.get(bucket, {})
        report = MirrorReport(uploaded=sorted(local.keys()),
                              deleted=sorted(key for key in existing if key not in local))
        self.buckets[bucket] = local
        return report


class FailingFileBackend(LocalFileBackend):
    def __init__(self, fail_on: Set[str]):
        self.fail_on = fail_on

    def make_dir(self, path: str) -> None:
        if "make_dir" in self.fail_on:
            raise PermissionError(13, "Permission denied", path)
        super().make_dir(path)

    def remove_tree(self, path: str) -> None:
        if "remove_tree" in self.fail_on:
            raise PermissionError(13, "Permission denied", path)
        super().remove_tree(path)

    def remove_file(self, path: str) -> None:
        if "remove_file" in self.fail_on:
            raise PermissionError(13, "Permission denied", path)
        super().remove_file(path)

    def clear_dir(self, path: str) -> None:
        if "clear_dir" in self.fail_on:
            raise PermissionError(13, "Permission denied", path)
        super().clear_dir(path)


WEBSITE_FILES: Dict[str, bytes] = {
    "index.html": b"<html>index</html>",
    "assets/app.js": b"console.log('app')",
}


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage({
        "src-bucket": {"in/folder/app.zip": make_zip(WEBSITE_FILES)},
        "dest-bucket": {"stale.html": b"old"},
    })


def backends_for(storage: FakeStorage, filesystem: Optional[LocalFileBackend] = None) -> BackendsContext:
    return BackendsContext(lister=storage,
                           fetcher=storage,
                           mirror=storage,
                           filesystem=filesystem or LocalFileBackend(),
                           extractor=ZipBackend())


@pytest.fixture
def backends(storage: FakeStorage) -> BackendsContext:
    return backends_for(storage)
