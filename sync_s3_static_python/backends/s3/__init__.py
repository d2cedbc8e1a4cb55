from sync_s3_static_python.backends.s3.s3_backend import (S3Backend,
                                                          S3BackendError)
