"""
Run status, lifecycle stage and view type enumerations.

Values are the exact strings the tracking server puts on the wire, so the
members can be passed straight into request bodies and query strings.
"""

from enum import Enum


class LifecycleStage(str, Enum):
    """Soft-delete marker shared by experiments and runs.

    - active: visible to default listings and searches
    - deleted: marked for deletion, still retrievable by id
    """

    ACTIVE = "active"
    DELETED = "deleted"


class RunStatus(str, Enum):
    """Run status enumeration.

    Represents the current state of a run:
    - RUNNING: Run has been initiated
    - SCHEDULED: Run is scheduled to run at a later time
    - FINISHED: Run has completed
    - FAILED: Run execution failed
    - KILLED: Run killed by user
    """

    RUNNING = "RUNNING"
    SCHEDULED = "SCHEDULED"
    FINISHED = "FINISHED"
    FAILED = "FAILED"
    KILLED = "KILLED"

    @property
    def is_terminal(self) -> bool:
        """Whether the status ends the run (FINISHED, FAILED or KILLED)."""
        return self in (RunStatus.FINISHED, RunStatus.FAILED, RunStatus.KILLED)


class ViewType(str, Enum):
    """Which lifecycle stages a listing or search returns."""

    ACTIVE_ONLY = "ACTIVE_ONLY"
    DELETED_ONLY = "DELETED_ONLY"
    ALL = "ALL"
