from sync_s3_static_python.backends.file.actions.file_cleanup import \
    FileCleanup
from sync_s3_static_python.backends.file.actions.file_prepare import \
    FilePrepare
