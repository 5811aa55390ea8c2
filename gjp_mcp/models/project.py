from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class Phase(str, Enum):
    """The editing phase a project is in."""

    NONE = "none"
    GATHERING = "gathering"
    DRY_RUNNING = "dry_running"


class TagType(str, Enum):
    """Semantic events recorded as tags in the snapshot ledger."""

    GATHERING_STARTED = "gathering_started"
    GATHERING_FINISHED = "gathering_finished"
    DRY_RUN_STARTED = "dry_run_started"
    DRY_RUN_FINISHED = "dry_run_finished"


class PhaseTransition(BaseModel):
    """Outcome of a gather, dry_run or finish call."""

    requested: str
    changed: bool
    phase: Phase  # phase after the call
    closed: Phase = Phase.NONE  # phase that was finished, if any


class ProjectStatus(BaseModel):
    """A read-only view of a project's on-disk state."""

    name: str
    root: Path
    phase: Phase
    version: str | None = None
    tag_counts: dict[TagType, int] = Field(default_factory=dict)
