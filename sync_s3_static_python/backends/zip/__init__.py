from sync_s3_static_python.backends.zip.zip_backend import ZipBackend
