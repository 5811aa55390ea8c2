"""Storage of the current phase of a project."""

import logging
from pathlib import Path
from typing import Protocol

from gjp_mcp.models.project import Phase

logger = logging.getLogger(__name__)

MARKER_PHASES = [Phase.GATHERING, Phase.DRY_RUNNING]


class PhaseStore(Protocol):
    """Reads and writes the phase flag of a project."""

    def read(self) -> Phase: ...

    def write(self, phase: Phase) -> None: ...

    def clear(self) -> None: ...


def marker_file_name(phase: Phase) -> str:
    """Returns the name of the marker file that represents a phase."""
    return f".{phase.value}"


class MarkerFilePhaseStore:
    """
    Keeps the phase as an empty marker file at the project root.

    At most one marker exists at a time: writing a phase removes every other
    marker before creating its own.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def read(self) -> Phase:
        for phase in MARKER_PHASES:
            if (self.root / marker_file_name(phase)).exists():
                return phase
        return Phase.NONE

    def write(self, phase: Phase) -> None:
        for a_phase in MARKER_PHASES:
            marker = self.root / marker_file_name(a_phase)
            if a_phase != phase:
                marker.unlink(missing_ok=True)
        if phase != Phase.NONE:
            (self.root / marker_file_name(phase)).touch()
        logger.debug(f"phase marker set to {phase.value}")

    def clear(self) -> None:
        self.write(Phase.NONE)


class InMemoryPhaseStore:
    """Keeps the phase in memory. Used where no marker files should be touched."""

    def __init__(self, phase: Phase = Phase.NONE) -> None:
        self.phase = phase

    def read(self) -> Phase:
        return self.phase

    def write(self, phase: Phase) -> None:
        self.phase = phase

    def clear(self) -> None:
        self.phase = Phase.NONE
