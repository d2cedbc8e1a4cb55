from datetime import datetime
from typing import List

from sync_s3_static_python.actions.action import Action
from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ActionResultCode)
from sync_s3_static_python.backends.backends_context import BackendsContext
from sync_s3_static_python.pipeline.pipeline_context import (PipelineContext,
                                                             PipelineState)
from sync_s3_static_python.utils.logger import logger


class Pipeline:
    """
    Class responsible for running the sync actions in order
    The first failing action stops the pipeline, nothing done before it is rolled back
    """
    def __init__(self, context: PipelineContext, actions: List[Action]):
        self.__context = context
        self.__actions = actions
        self.__state = PipelineState()

    @property
    def context(self) -> PipelineContext:
        """
        Getter for the pipeline context
        :return: PipelineContext
        """
        return self.__context

    @property
    def actions(self) -> List[Action]:
        """
        Getter for the pipeline actions
        :return: List[Action]
        """
        return self.__actions

    @property
    def state(self) -> PipelineState:
        """
        Getter for the state produced by the actions that ran so far
        :return: PipelineState
        """
        return self.__state

    def execute_pipeline(self, backends_context: BackendsContext) -> ActionResult:
        """
        Executes the entire pipeline
        Each action will be executed in order, a status line is printed before and after each one
        :param backends_context:
        :return: The failed action result, or a successful result if all actions ran
        """
        self.__state.stats.start_time = datetime.now()
        for action in self.__actions:
            action_name = action.action_type.value
            logger.info(f"[{self.context.name}][{action_name}] "
                        f"{action.describe(self.context, self.__state)}")
            action_result = action.execute(backends_context, self.context, self.__state)
            self.__state.stats.actions_executed += 1
            if action_result.result_code == ActionResultCode.FAILURE:
                for line in action_result.result:
                    logger.error(f"[{self.context.name}][{action_name}] {line}")
                logger.error(f"[{self.context.name}][{action_name}] "
                             f"Failed to run pipeline action [{action_name}] ({action_result.error_kind.value})")
                self.__state.stats.end_time = datetime.now()
                return action_result
            logger.info(f"[{self.context.name}][{action_name}] Action [{action_name}] successful")
        self.__state.stats.end_time = datetime.now()
        logger.notice(f"[{self.context.name}] Completed {self.__state.stats.actions_executed} actions "
                      f"in {self.__state.stats.duration:.2f} seconds")
        return ActionResult.success(None)
