import mimetypes
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from boto3.exceptions import S3UploadFailedError

from sync_s3_static_python.backends.backend import (DirectoryMirror,
                                                    MirrorReport,
                                                    ObjectFetcher,
                                                    ObjectLister)
from sync_s3_static_python.backends.s3.models import S3Model
from sync_s3_static_python.utils.logger import logger


class S3BackendError(Exception):
    pass


class S3Backend(ObjectLister, ObjectFetcher, DirectoryMirror):
    def __init__(self, s3_args: S3Model, client: Optional[Any] = None):
        self.__s3_args = s3_args
        self.__client = client

    @staticmethod
    def backend_name() -> str:
        return "s3"

    @property
    def s3_args(self) -> S3Model:
        return self.__s3_args

    @property
    def client(self) -> Any:
        if self.__client is None:
            import boto3
            from botocore.config import Config
            session = boto3.Session(profile_name=self.__s3_args.profile)
            self.__client = session.client(
                "s3",
                region_name=self.__s3_args.region,
                config=Config(signature_version=self.__s3_args.signature_version))
        return self.__client

    def __list_objects_meta(self, bucket: str, prefix: str) -> Dict[str, Tuple[int, datetime]]:
        objects: Dict[str, Tuple[int, datetime]] = {}
        paginator = self.client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix,
                                       PaginationConfig={"PageSize": self.__s3_args.page_size}):
            for obj in page.get("Contents", []):
                objects[obj["Key"]] = (obj.get("Size", 0), obj["LastModified"])
        return objects

    def list_objects(self, bucket: str, prefix: str) -> List[str]:
        logger.debug(f"[{self.backend_name()}] Listing [s3://{bucket}/{prefix}]")
        return list(self.__list_objects_meta(bucket, prefix).keys())

    def fetch_object(self, bucket: str, key: str, to_path: str) -> None:
        logger.debug(f"[{self.backend_name()}] Downloading [s3://{bucket}/{key}] to [{to_path}]")
        self.client.download_file(Bucket=bucket, Key=key, Filename=to_path)

    @staticmethod
    def __local_files(local_dir: str) -> Dict[str, str]:
        files: Dict[str, str] = {}
        for root, _, names in os.walk(local_dir):
            for name in names:
                full_path = os.path.join(root, name)
                key = os.path.relpath(full_path, local_dir).replace(os.sep, "/")
                files[key] = full_path
        return files

    @staticmethod
    def __needs_upload(full_path: str, remote: Optional[Tuple[int, datetime]]) -> bool:
        if remote is None:
            return True
        remote_size, remote_modified = remote
        stat = os.stat(full_path)
        if stat.st_size != remote_size:
            return True
        local_modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        if remote_modified.tzinfo is None:
            remote_modified = remote_modified.replace(tzinfo=timezone.utc)
        return local_modified > remote_modified

    def __upload_args(self, key: str) -> Dict[str, str]:
        extra_args: Dict[str, str] = {}
        if self.__s3_args.acl:
            extra_args["ACL"] = self.__s3_args.acl
        content_type, _ = mimetypes.guess_type(key)
        if content_type:
            extra_args["ContentType"] = content_type
        return extra_args

    def __delete_keys(self, bucket: str, keys: List[str]) -> None:
        for i in range(0, len(keys), self.__s3_args.page_size):
            batch = keys[i:i + self.__s3_args.page_size]
            response = self.client.delete_objects(
                Bucket=bucket,
                Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True})
            errors = response.get("Errors", [])
            if errors:
                failed = ", ".join(f"{e.get('Key')} ({e.get('Code')})" for e in errors)
                raise S3BackendError(f"Could not delete [{failed}] from [{bucket}]")

    def mirror(self, local_dir: str, bucket: str) -> MirrorReport:
        if not os.path.isdir(local_dir):
            raise S3BackendError(f"Local directory [{local_dir}] does not exist")
        report = MirrorReport()
        remote = self.__list_objects_meta(bucket, "")
        local = self.__local_files(local_dir)
        for key in sorted(local.keys()):
            full_path = local[key]
            if not self.__needs_upload(full_path, remote.get(key)):
                report.unchanged.append(key)
                continue
            logger.debug(f"[{self.backend_name()}] Uploading [{full_path}] to [s3://{bucket}/{key}]")
            try:
                self.client.upload_file(Filename=full_path, Bucket=bucket, Key=key,
                                        ExtraArgs=self.__upload_args(key))
            except S3UploadFailedError as e:
                raise S3BackendError(f"Could not upload [{full_path}] to [s3://{bucket}/{key}]: {e}") from e
            report.uploaded.append(key)
        if self.__s3_args.delete:
            extraneous = sorted(key for key in remote.keys() if key not in local)
            if extraneous:
                logger.debug(f"[{self.backend_name()}] Deleting {len(extraneous)} objects from [{bucket}]")
                self.__delete_keys(bucket, extraneous)
            report.deleted.extend(extraneous)
        return report
