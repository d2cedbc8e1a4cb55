from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)
from sync_s3_static_python.utils.logger import logger


class FilePrepare(Action):
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        return f"Preparing extraction directory [{pipeline_context.extract_dir}]"

    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        filesystem = backends_context.filesystem
        extract_dir = pipeline_context.extract_dir
        if filesystem.exists(extract_dir):
            logger.info(f"[{pipeline_context.name}][{self.action_type.value}] "
                        f"Directory [{extract_dir}] exists already, removing existing files")
            try:
                filesystem.remove_tree(extract_dir)
            except OSError as e:
                return ActionResult.failure(self.action_type, ErrorKind.RemoveFailed,
                                            f"Error removing existing files from [{extract_dir}]: {e}")
        try:
            filesystem.make_dir(extract_dir)
        except OSError as e:
            return ActionResult.failure(self.action_type, ErrorKind.MkdirFailed,
                                        f"Error creating [{extract_dir}] to hold zip output: {e}")
        return ActionResult.success(self.action_type, extract_dir)

    @property
    def action_type(self) -> ActionType:
        return ActionType.Prepare
