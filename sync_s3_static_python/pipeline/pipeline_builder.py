from typing import Final, List, Optional

from pydantic import ValidationError

from sync_s3_static_python.pipeline.pipeline import Pipeline
from sync_s3_static_python.pipeline.pipeline_context import (
    DEFAULT_ACL, DEFAULT_DOWNLOAD_DIR, DEFAULT_EXTRACT_DIR, DEFAULT_REGION,
    PipelineContext)
from sync_s3_static_python.utils.logger import logger

MIN_ARGUMENTS: Final[int] = 3
MAX_ARGUMENTS: Final[int] = 6
CLEANUP_KEYWORDS: Final[List[str]] = ["clean", "CLEAN"]

USAGE: Final[str] = "sync-s3-static [Input source bucket] [Input source folder] [Output bucket (web)] " \
                    "[Optional:local zip directory] [Optional:local extract directory] [Optional:clean]"
EXAMPLE: Final[str] = "sync-s3-static codepipeline-us-east-1-123456789012 folder1/folder2 " \
                      "qa.testbucket.com /tmp /tmp/website clean"


class PipelineBuilder:
    @staticmethod
    def is_cleanup_requested(value: Optional[str]) -> bool:
        """
        Cleanup is destructive so it is only applied when explicitly asked for
        :param value:
        :return:
        """
        return value in CLEANUP_KEYWORDS

    @staticmethod
    def usage() -> str:
        return f"{USAGE}\nExample:\n{EXAMPLE}"

    @staticmethod
    def resolve_context(arguments: List[str],
                        region: str = DEFAULT_REGION,
                        acl: str = DEFAULT_ACL,
                        profile: Optional[str] = None) -> Optional[PipelineContext]:
        """
        Resolves the positional arguments into the run configuration
        Optional positions fall back to their defaults when absent
        :param arguments:
        :param region:
        :param acl:
        :param profile:
        :return: None if not enough arguments were given
        """
        if len(arguments) < MIN_ARGUMENTS:
            print(PipelineBuilder.usage())
            return None
        if len(arguments) > MAX_ARGUMENTS:
            logger.warning(f"Ignoring extra arguments {arguments[MAX_ARGUMENTS:]}")
        try:
            context = PipelineContext(
                source_bucket=arguments[0],
                source_folder=arguments[1],
                dest_bucket=arguments[2],
                download_dir=arguments[3] if len(arguments) > 3 else DEFAULT_DOWNLOAD_DIR,
                extract_dir=arguments[4] if len(arguments) > 4 else DEFAULT_EXTRACT_DIR,
                cleanup=PipelineBuilder.is_cleanup_requested(arguments[5] if len(arguments) > 5 else None),
                region=region,
                acl=acl,
                profile=profile)
        except ValidationError as e:
            logger.error(f"Invalid arguments: {e}")
            print(PipelineBuilder.usage())
            return None
        logger.info(f"Param 1: INPUT_BUCKET = {context.source_bucket}")
        logger.info(f"Param 2: INPUT_FOLDER = {context.source_folder}")
        logger.info(f"Param 3: WEB_BUCKET = {context.dest_bucket}")
        logger.info(f"Param 4: DIR_ZIP_FILE_OUTPUT = {context.download_dir}")
        logger.info(f"Param 5: DIR_ZIP_EXTRACT_OUTPUT = {context.extract_dir}")
        logger.info(f"Param 6: CLEAN = {context.cleanup}")
        return context

    @staticmethod
    def create(context: PipelineContext) -> Pipeline:
        """
        Creates the sync pipeline with all of its actions in order
        :param context:
        :return:
        """
        from sync_s3_static_python.backends.file.actions import (FileCleanup,
                                                                 FilePrepare)
        from sync_s3_static_python.backends.s3.actions import (S3Discover,
                                                               S3Fetch, S3Sync)
        from sync_s3_static_python.backends.zip.actions import ZipExtract
        return Pipeline(context, [S3Discover(),
                                  S3Fetch(),
                                  FilePrepare(),
                                  ZipExtract(),
                                  S3Sync(),
                                  FileCleanup()])
