from typing import Optional

from pydantic import BaseModel, Field


class S3Model(BaseModel):
    region: str = Field(default="us-east-1", description="Region used by the S3 client")
    acl: Optional[str] = Field(default="public-read", description="Canned ACL for uploaded objects")
    profile: Optional[str] = Field(default=None, description="AWS profile, default credentials chain if not given")
    signature_version: str = Field(default="s3v4", description="Signature version of the S3 client")
    delete: bool = Field(default=True, description="Delete bucket objects missing from the local directory")
    page_size: int = Field(default=1000, description="Page size for listings and batch deletes")
