from enum import Enum, IntEnum
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from sync_s3_static_python.actions.action_type import ActionType


class ActionResultCode(IntEnum):
    SUCCESS = 0,
    FAILURE = 1


class ErrorKind(str, Enum):
    NotEnoughArguments = "not-enough-arguments",
    CopyFailed = "copy-failed",
    MkdirFailed = "mkdir-failed",
    UnzipFailed = "unzip-failed",
    RemoveFailed = "remove-failed",
    SyncFailed = "sync-failed",
    ArtifactNotFound = "artifact-not-found",
    AmbiguousArtifact = "ambiguous-artifact"


class ActionResult(BaseModel):
    action_type: Optional[ActionType] = Field(default=None, description="The action type that ran")
    result: List[Any] = Field(default_factory=list, description="Results of the action")
    result_code: ActionResultCode = Field(description="Result code of the action")
    error_kind: Optional[ErrorKind] = Field(default=None, description="Kind of failure, set on failure only")

    @property
    def failed(self) -> bool:
        return self.result_code != ActionResultCode.SUCCESS

    @staticmethod
    def success(action_type: Optional[ActionType], *result: Any) -> "ActionResult":
        return ActionResult(action_type=action_type,
                            result=list(result),
                            result_code=ActionResultCode.SUCCESS)

    @staticmethod
    def failure(action_type: Optional[ActionType], error_kind: ErrorKind, *result: Any) -> "ActionResult":
        return ActionResult(action_type=action_type,
                            result=list(result),
                            result_code=ActionResultCode.FAILURE,
                            error_kind=error_kind)
