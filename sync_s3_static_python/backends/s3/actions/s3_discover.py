from botocore.exceptions import BotoCoreError, ClientError

from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)
from sync_s3_static_python.utils.logger import logger


class S3Discover(Action):
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        return f"Looking for the artifact in [s3://{pipeline_context.source_bucket}/" \
               f"{pipeline_context.source_prefix}]"

    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        location = f"s3://{pipeline_context.source_bucket}/{pipeline_context.source_prefix}"
        try:
            keys = backends_context.lister.list_objects(pipeline_context.source_bucket,
                                                        pipeline_context.source_prefix)
        except (BotoCoreError, ClientError) as e:
            return ActionResult.failure(self.action_type, ErrorKind.ArtifactNotFound,
                                        f"Error listing [{location}]: {e}")
        # Folder placeholders created by the console are not artifacts
        keys = [key for key in keys if not key.endswith("/")]
        if not keys:
            return ActionResult.failure(self.action_type, ErrorKind.ArtifactNotFound,
                                        f"No artifact found in [{location}]")
        if len(keys) > 1:
            return ActionResult.failure(self.action_type, ErrorKind.AmbiguousArtifact,
                                        f"Expected a single artifact in [{location}], "
                                        f"found {len(keys)}: {', '.join(sorted(keys))}")
        pipeline_state.artifact_key = keys[0]
        logger.info(f"[{pipeline_context.name}][{self.action_type.value}] "
                    f"File found: [{pipeline_state.artifact_key}], artifact [{pipeline_state.artifact_name}]")
        return ActionResult.success(self.action_type, pipeline_state.artifact_key)

    @property
    def action_type(self) -> ActionType:
        return ActionType.Discover
