import zipfile

from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)
from sync_s3_static_python.utils.logger import logger


class ZipExtract(Action):
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        return f"Extracting [{pipeline_state.artifact_path}] to [{pipeline_context.extract_dir}]"

    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        if not pipeline_state.artifact_path:
            return ActionResult.failure(self.action_type, ErrorKind.UnzipFailed,
                                        "No fetched artifact to extract")
        try:
            members = backends_context.extractor.extract(pipeline_state.artifact_path,
                                                         pipeline_context.extract_dir)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
            return ActionResult.failure(self.action_type, ErrorKind.UnzipFailed,
                                        f"Error unzipping [{pipeline_state.artifact_name}] to "
                                        f"[{pipeline_context.extract_dir}]: {e}")
        logger.debug(f"[{pipeline_context.name}][{self.action_type.value}] "
                     f"Extracted {len(members)} entries")
        return ActionResult.success(self.action_type, *members)

    @property
    def action_type(self) -> ActionType:
        return ActionType.Extract
