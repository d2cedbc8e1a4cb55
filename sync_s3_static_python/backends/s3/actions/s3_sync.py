from botocore.exceptions import BotoCoreError, ClientError

from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.backends.s3.s3_backend import S3BackendError
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)
from sync_s3_static_python.utils.logger import logger


class S3Sync(Action):
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        return f"Syncing [{pipeline_context.extract_dir}] to [s3://{pipeline_context.dest_bucket}] " \
               f"in [{pipeline_context.region}] with acl [{pipeline_context.acl}]"

    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        try:
            report = backends_context.mirror.mirror(pipeline_context.extract_dir,
                                                    pipeline_context.dest_bucket)
        except (BotoCoreError, ClientError, S3BackendError, OSError) as e:
            return ActionResult.failure(self.action_type, ErrorKind.SyncFailed,
                                        f"Error syncing [{pipeline_context.extract_dir}] to "
                                        f"[{pipeline_context.dest_bucket}]: {e}")
        logger.info(f"[{pipeline_context.name}][{self.action_type.value}] "
                    f"Uploaded {len(report.uploaded)}, deleted {len(report.deleted)}, "
                    f"unchanged {len(report.unchanged)}")
        return ActionResult.success(self.action_type, report)

    @property
    def action_type(self) -> ActionType:
        return ActionType.Sync
