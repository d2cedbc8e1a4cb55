from typing import TYPE_CHECKING

from sync_s3_static_python.backends.backend import (ArchiveExtractor,
                                                    DirectoryMirror,
                                                    LocalFilesystem,
                                                    ObjectFetcher,
                                                    ObjectLister)

if TYPE_CHECKING:
    from sync_s3_static_python.pipeline.pipeline_context import \
        PipelineContext


class BackendsContext:
    """
    Holds the collaborators the pipeline actions run against
    """
    def __init__(self, lister: ObjectLister,
                 fetcher: ObjectFetcher,
                 mirror: DirectoryMirror,
                 filesystem: LocalFilesystem,
                 extractor: ArchiveExtractor):
        self.__lister = lister
        self.__fetcher = fetcher
        self.__mirror = mirror
        self.__filesystem = filesystem
        self.__extractor = extractor

    @staticmethod
    def create(context: "PipelineContext") -> "BackendsContext":
        """
        Creates the default backends: S3 for storage, the local disk and zip archives
        :param context:
        :return:
        """
        from sync_s3_static_python.backends.file.file_backend import \
            LocalFileBackend
        from sync_s3_static_python.backends.s3.models import S3Model
        from sync_s3_static_python.backends.s3.s3_backend import S3Backend
        from sync_s3_static_python.backends.zip.zip_backend import ZipBackend
        s3 = S3Backend(S3Model(region=context.region,
                               acl=context.acl,
                               profile=context.profile))
        return BackendsContext(lister=s3,
                               fetcher=s3,
                               mirror=s3,
                               filesystem=LocalFileBackend(),
                               extractor=ZipBackend())

    @property
    def lister(self) -> ObjectLister:
        return self.__lister

    @property
    def fetcher(self) -> ObjectFetcher:
        return self.__fetcher

    @property
    def mirror(self) -> DirectoryMirror:
        return self.__mirror

    @property
    def filesystem(self) -> LocalFilesystem:
        return self.__filesystem

    @property
    def extractor(self) -> ArchiveExtractor:
        return self.__extractor
