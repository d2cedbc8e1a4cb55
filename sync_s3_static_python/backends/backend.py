from abc import abstractmethod
from typing import List

from pydantic import BaseModel, Field


class MirrorReport(BaseModel):
    uploaded: List[str] = Field(default_factory=list, description="Keys uploaded to the bucket")
    deleted: List[str] = Field(default_factory=list, description="Keys deleted from the bucket")
    unchanged: List[str] = Field(default_factory=list, description="Keys already up to date")


class Backend:
    @staticmethod
    @abstractmethod
    def backend_name() -> str:
        pass


class ObjectLister(Backend):
    @abstractmethod
    def list_objects(self, bucket: str, prefix: str) -> List[str]:
        """
        Lists every object key under the prefix, recursively
        :param bucket:
        :param prefix:
        :return:
        """
        pass


class ObjectFetcher(Backend):
    @abstractmethod
    def fetch_object(self, bucket: str, key: str, to_path: str) -> None:
        """
        Downloads a single object to a local file path
        :param bucket:
        :param key:
        :param to_path:
        :return:
        """
        pass


class DirectoryMirror(Backend):
    @abstractmethod
    def mirror(self, local_dir: str, bucket: str) -> MirrorReport:
        """
        One way sync of a local directory to the root of a bucket
        Objects missing locally are deleted from the bucket
        :param local_dir:
        :param bucket:
        :return:
        """
        pass


class LocalFilesystem(Backend):
    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        pass

    @abstractmethod
    def make_dir(self, path: str) -> None:
        pass

    @abstractmethod
    def remove_tree(self, path: str) -> None:
        pass

    @abstractmethod
    def remove_file(self, path: str) -> None:
        pass

    @abstractmethod
    def clear_dir(self, path: str) -> None:
        """
        Removes everything inside the directory, keeping the directory itself
        :param path:
        :return:
        """
        pass


class ArchiveExtractor(Backend):
    @abstractmethod
    def extract(self, archive_path: str, to_dir: str) -> List[str]:
        """
        Extracts the archive into the directory, overwriting existing files
        :param archive_path:
        :param to_dir:
        :return: Names of the extracted members
        """
        pass
