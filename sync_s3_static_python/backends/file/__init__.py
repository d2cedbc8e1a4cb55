from sync_s3_static_python.backends.file.file_backend import LocalFileBackend
