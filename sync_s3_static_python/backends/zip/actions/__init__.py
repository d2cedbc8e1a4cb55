from sync_s3_static_python.backends.zip.actions.zip_extract import ZipExtract
