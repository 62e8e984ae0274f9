# renderer/state.py
from enum import Enum


class RenderState(Enum):
    """
    Lifecycle of one render invocation.

    IDLE -> RUNNING -> COMPLETED | CANCELLED | FAILED
    """
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"
