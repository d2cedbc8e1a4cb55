import os

from botocore.exceptions import BotoCoreError, ClientError

from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)


class S3Fetch(Action):
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        return f"Copying [{pipeline_state.artifact_name}] to [{pipeline_context.download_dir}]"

    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        if not pipeline_state.artifact_key:
            return ActionResult.failure(self.action_type, ErrorKind.CopyFailed,
                                        "No artifact was discovered to copy")
        to_path = os.path.join(pipeline_context.download_dir, pipeline_state.artifact_name)
        try:
            filesystem = backends_context.filesystem
            if not filesystem.is_dir(pipeline_context.download_dir):
                filesystem.make_dir(pipeline_context.download_dir)
            backends_context.fetcher.fetch_object(pipeline_context.source_bucket,
                                                  pipeline_state.artifact_key,
                                                  to_path)
        except (BotoCoreError, ClientError, OSError) as e:
            return ActionResult.failure(self.action_type, ErrorKind.CopyFailed,
                                        f"Error copying [{pipeline_state.artifact_name}] to "
                                        f"[{pipeline_context.download_dir}]: {e}")
        pipeline_state.artifact_path = to_path
        return ActionResult.success(self.action_type, to_path)

    @property
    def action_type(self) -> ActionType:
        return ActionType.Fetch
