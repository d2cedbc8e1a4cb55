#!/usr/bin/env python3
# PYTHON_ARGCOMPLETE_OK
# -*- coding: utf-8 -*-

import argparse
import sys
from typing import Dict, Final, List, Optional

import argcomplete

from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_builder import PipelineBuilder
from sync_s3_static_python.pipeline.pipeline_context import (DEFAULT_ACL,
                                                             DEFAULT_REGION)
from sync_s3_static_python.utils.logger import logger, set_debug

EXIT_SUCCESS: Final[int] = 0
EXIT_CODES: Final[Dict[ErrorKind, int]] = {
    ErrorKind.NotEnoughArguments: 1,
    ErrorKind.CopyFailed: 2,
    ErrorKind.MkdirFailed: 3,
    ErrorKind.UnzipFailed: 4,
    ErrorKind.RemoveFailed: 5,
    ErrorKind.SyncFailed: 6,
    ErrorKind.ArtifactNotFound: 7,
    ErrorKind.AmbiguousArtifact: 8,
}


def exit_code_for(result: ActionResult) -> int:
    if not result.failed:
        return EXIT_SUCCESS
    return EXIT_CODES[result.error_kind]


class ArgumentsError(Exception):
    pass


class SyncArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise ArgumentsError(message)


def create_parser() -> argparse.ArgumentParser:
    parser = SyncArgumentParser(
        prog="sync-s3-static",
        usage=PipelineBuilder.usage(),
        description="Take a zip artifact from a bucket, extract it and sync it to a static website bucket")
    parser.add_argument("arguments", nargs="*",
                        help="<source bucket> <source folder> <web bucket> "
                             "[local zip directory] [local extract directory] [clean]")
    parser.add_argument("--region", default=DEFAULT_REGION,
                        help="Region of the web bucket")
    parser.add_argument("--acl", default=DEFAULT_ACL,
                        help="Canned ACL applied to the uploaded files")
    parser.add_argument("--profile", default=None,
                        help="AWS profile to use instead of the default credentials chain")
    parser.add_argument("--logger-level-debug", action="store_true",
                        help="Enable debug logging")
    return parser


def run(argv: Optional[List[str]] = None,
        backends_context: Optional[BackendsContext] = None) -> int:
    parser = create_parser()
    argcomplete.autocomplete(parser)
    try:
        args = parser.parse_intermixed_args(argv)
    except ArgumentsError as e:
        logger.error(f"Invalid arguments: {e}")
        print(PipelineBuilder.usage())
        return EXIT_CODES[ErrorKind.NotEnoughArguments]
    set_debug(args.logger_level_debug)
    logger.info("sync-s3-static")
    context = PipelineBuilder.resolve_context(args.arguments,
                                              region=args.region,
                                              acl=args.acl,
                                              profile=args.profile)
    if context is None:
        return EXIT_CODES[ErrorKind.NotEnoughArguments]
    if backends_context is None:
        backends_context = BackendsContext.create(context)
    pipeline = PipelineBuilder.create(context)
    result = pipeline.execute_pipeline(backends_context)
    if result.failed:
        return exit_code_for(result)
    logger.info("sync-s3-static completed")
    return EXIT_SUCCESS


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
