from sync_s3_static_python.actions.action_result import (ActionResult,
                                                         ActionResultCode,
                                                         ErrorKind)
from sync_s3_static_python.actions.action_type import ActionType
