import os
import shutil

from sync_s3_static_python.backends.backend import LocalFilesystem


class LocalFileBackend(LocalFilesystem):
    @staticmethod
    def backend_name() -> str:
        return "file"

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def make_dir(self, path: str) -> None:
        os.makedirs(path)

    def remove_tree(self, path: str) -> None:
        shutil.rmtree(path)

    def remove_file(self, path: str) -> None:
        os.remove(path)

    def clear_dir(self, path: str) -> None:
        for entry in os.listdir(path):
            full_path = os.path.join(path, entry)
            if os.path.isdir(full_path) and not os.path.islink(full_path):
                shutil.rmtree(full_path)
            else:
                os.remove(full_path)
