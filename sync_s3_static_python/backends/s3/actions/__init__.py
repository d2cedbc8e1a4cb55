from sync_s3_static_python.backends.s3.actions.s3_discover import S3Discover
from sync_s3_static_python.backends.s3.actions.s3_fetch import S3Fetch
from sync_s3_static_python.backends.s3.actions.s3_sync import S3Sync
