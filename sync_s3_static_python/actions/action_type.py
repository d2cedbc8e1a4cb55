from enum import Enum


class ActionType(str, Enum):
    Discover = "discover",
    Fetch = "fetch",
    Prepare = "prepare",
    Extract = "extract",
    Sync = "sync",
    Cleanup = "cleanup"
