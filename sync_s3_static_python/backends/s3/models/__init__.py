from sync_s3_static_python.backends.s3.models.s3_model import S3Model
