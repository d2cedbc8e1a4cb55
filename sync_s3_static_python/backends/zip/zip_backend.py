import os
import time
import zipfile
import zlib
from typing import List

from sync_s3_static_python.backends.backend import ArchiveExtractor


def is_within_directory(directory: str, target: str) -> bool:
    abs_directory = os.path.abspath(directory)
    abs_target = os.path.abspath(target)
    return os.path.commonpath([abs_directory, abs_target]) == abs_directory


class ZipBackend(ArchiveExtractor):
    @staticmethod
    def backend_name() -> str:
        return "zip"

    @staticmethod
    def __restore_mtime(path: str, info: zipfile.ZipInfo) -> None:
        # Zip timestamps are local time without a timezone
        modified = time.mktime(info.date_time + (0, 0, -1))
        os.utime(path, (modified, modified))

    def extract(self, archive_path: str, to_dir: str) -> List[str]:
        with zipfile.ZipFile(archive_path) as archive:
            members = archive.infolist()
            for member in members:
                if not is_within_directory(to_dir, os.path.join(to_dir, member.filename)):
                    raise zipfile.BadZipFile(f"Attempted path traversal in zip file [{member.filename}]")
            try:
                for member in members:
                    # extract overwrites files that already exist
                    extracted_path = archive.extract(member, to_dir)
                    if not member.is_dir():
                        self.__restore_mtime(extracted_path, member)
            except (zlib.error, NotImplementedError, RuntimeError, EOFError) as e:
                raise zipfile.BadZipFile(f"Could not extract [{archive_path}]: {e}") from e
        return [member.filename for member in members]
