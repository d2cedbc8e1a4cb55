from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)
from sync_s3_static_python.utils.logger import logger


class FileCleanup(Action):
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        if not pipeline_context.cleanup:
            return "Checking if cleanup was requested"
        return f"Removing [{pipeline_state.artifact_path}] and the contents of [{pipeline_context.extract_dir}]"

    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        if not pipeline_context.cleanup:
            logger.info(f"[{pipeline_context.name}][{self.action_type.value}] "
                        f"Cleanup was not requested, zip file and output files remain")
            return ActionResult.success(self.action_type)
        if not pipeline_state.artifact_path:
            return ActionResult.failure(self.action_type, ErrorKind.RemoveFailed,
                                        "No fetched artifact to remove")
        filesystem = backends_context.filesystem
        try:
            filesystem.remove_file(pipeline_state.artifact_path)
        except OSError as e:
            return ActionResult.failure(self.action_type, ErrorKind.RemoveFailed,
                                        f"Error removing retrieved zip file [{pipeline_state.artifact_name}] "
                                        f"from [{pipeline_context.download_dir}]: {e}")
        logger.info(f"[{pipeline_context.name}][{self.action_type.value}] "
                    f"Removed [{pipeline_state.artifact_name}] from [{pipeline_context.download_dir}]")
        try:
            filesystem.clear_dir(pipeline_context.extract_dir)
        except OSError as e:
            return ActionResult.failure(self.action_type, ErrorKind.RemoveFailed,
                                        f"Error removing extracted files from [{pipeline_context.extract_dir}]: {e}")
        logger.info(f"[{pipeline_context.name}][{self.action_type.value}] "
                    f"Removed files from [{pipeline_context.extract_dir}]")
        return ActionResult.success(self.action_type)

    @property
    def action_type(self) -> ActionType:
        return ActionType.Cleanup
