import os
from datetime import datetime
from typing import Final, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DOWNLOAD_DIR: Final[str] = "/tmp"
DEFAULT_EXTRACT_SUBFOLDER: Final[str] = "website"
DEFAULT_EXTRACT_DIR: Final[str] = os.path.join(DEFAULT_DOWNLOAD_DIR, DEFAULT_EXTRACT_SUBFOLDER)
DEFAULT_REGION: Final[str] = "us-east-1"
DEFAULT_ACL: Final[str] = "public-read"


class PipelineStats(BaseModel):
    start_time: Optional[datetime] = Field(default=None, description="Start time of the pipeline")
    end_time: Optional[datetime] = Field(default=None, description="End time of the pipeline")
    actions_executed: int = Field(default=0, description="Number of actions executed so far")

    @property
    def duration(self) -> Optional[float]:
        if not self.start_time or not self.end_time:
            return None
        return (self.end_time - self.start_time).total_seconds()


class PipelineContext(BaseModel):
    """
    Run configuration of a single sync, built once from the command line
    and never changed afterwards
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="sync-s3-static", description="Name of the pipeline used in log lines")
    source_bucket: str = Field(description="Bucket holding the build artifact")
    source_folder: str = Field(description="Folder inside the source bucket holding the artifact")
    dest_bucket: str = Field(description="Bucket serving the static website")
    download_dir: str = Field(default=DEFAULT_DOWNLOAD_DIR,
                              description="Local directory the artifact is downloaded to")
    extract_dir: str = Field(default=DEFAULT_EXTRACT_DIR,
                             description="Local directory the artifact is extracted to")
    cleanup: bool = Field(default=False, description="Remove the local artifact and extracted files on success")
    region: str = Field(default=DEFAULT_REGION, description="Region of the destination bucket")
    acl: str = Field(default=DEFAULT_ACL, description="Canned ACL applied to uploaded objects")
    profile: Optional[str] = Field(default=None, description="Optional AWS profile to use")

    @field_validator("source_bucket", "dest_bucket")
    @classmethod
    def bucket_validator(cls, v: str) -> str:
        """
        Validator for bucket names, accepts an optional s3:// prefix
        :param v:
        :return:
        """
        if v.startswith("s3://"):
            v = v[len("s3://"):]
        v = v.strip("/")
        if not v:
            raise ValueError("Bucket name is empty")
        return v

    @field_validator("source_folder")
    @classmethod
    def folder_validator(cls, v: str) -> str:
        return v.strip("/")

    @property
    def source_prefix(self) -> str:
        """
        Listing prefix of the source folder, always ending with a slash unless empty
        :return:
        """
        if not self.source_folder:
            return ""
        return f"{self.source_folder}/"


class PipelineState(BaseModel):
    """
    Values produced by one action and consumed by the following ones
    """
    artifact_key: Optional[str] = Field(default=None, description="Key of the discovered artifact")
    artifact_path: Optional[str] = Field(default=None, description="Local path of the fetched artifact")
    stats: PipelineStats = Field(default_factory=PipelineStats, description="Stats about the pipeline")

    @property
    def artifact_name(self) -> Optional[str]:
        if not self.artifact_key:
            return None
        return self.artifact_key.split("/")[-1]
