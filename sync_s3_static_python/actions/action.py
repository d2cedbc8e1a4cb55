from abc import abstractmethod

from sync_s3_static_python.actions.action_result import ActionResult
from sync_s3_static_python.actions.action_type import ActionType
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)


class Action:
    @abstractmethod
    def describe(self, pipeline_context: PipelineContext,
                 pipeline_state: PipelineState) -> str:
        """
        Short description of what the action is about to do, used for the status lines
        :param pipeline_context:
        :param pipeline_state:
        :return:
        """
        pass

    @abstractmethod
    def execute(self, backends_context: BackendsContext,
                pipeline_context: PipelineContext,
                pipeline_state: PipelineState) -> ActionResult:
        """
        Runs the action against the given backends
        Expected failures are returned as a failed result, never raised
        :param backends_context:
        :param pipeline_context:
        :param pipeline_state:
        :return:
        """
        pass

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        """
        Type of the action getter
        :return:
        """
        pass
