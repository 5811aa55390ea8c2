"""
A gjp project directory and its phase state machine.

A project alternates between a gathering phase (collecting upstream sources
and kit material) and a dry-running phase (simulating a build that must leave
sources untouched). Every transition is recorded as a git snapshot so the
phase history can be rebuilt from tags alone.

Only one process may operate on a project at a time; callers are responsible
for not running transitions concurrently against the same directory.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from gjp_mcp.models.project import Phase, ProjectStatus, TagType
from gjp_mcp.tools.project.file_lists import ChangedFileListTracker
from gjp_mcp.tools.project.git import GitRepository
from gjp_mcp.tools.project.lock import NullLock, ProjectLock
from gjp_mcp.tools.project.snapshots import SnapshotLedger
from gjp_mcp.tools.project.status import MarkerFilePhaseStore, PhaseStore
from gjp_mcp.tools.run import run
from gjp_mcp.utils.config import ServiceConfig

logger = logging.getLogger(__name__)

KIT_LIST_NAME = "kit"
INPUT_LIST_NAME = "input"
OUTPUT_LIST_NAME = "output"

PLACEHOLDER_NAME = "README"
PLACEHOLDER_TEXT = {
    "src": "Put one directory per package here, containing its upstream sources.\n",
    "kit": "Put the binaries needed to build the packages (build tools, libraries) here.\n",
    "file_lists": "Lists of files changed in each tracked directory, one path per line.\n",
}


class InvalidProjectError(ValueError):
    """Raised when a path is not inside a gjp project directory."""


class PhaseError(Exception):
    """Raised when an operation needs a phase other than the active one."""


class Project:
    """Encapsulates a gjp project directory."""

    def __init__(
        self,
        path: str | Path,
        config: ServiceConfig | None = None,
        phase_store: PhaseStore | None = None,
        lock: ProjectLock | None = None,
        git: GitRepository | None = None,
    ) -> None:
        self.config = config or ServiceConfig()
        self.full_path = self.find_project_dir(Path(path).expanduser().absolute(), self.config)

        self.git = git or GitRepository(
            self.full_path,
            git_binary=self.config.GJP_GIT_BINARY,
            echo=self.config.GJP_ECHO_COMMANDS,
        )
        self.phase_store = phase_store or MarkerFilePhaseStore(self.full_path)
        self.lock = lock or NullLock()
        self.ledger = SnapshotLedger(self.git, tag_prefix=self.config.GJP_TAG_PREFIX)
        self.file_lists = ChangedFileListTracker(
            self.ledger,
            self.full_path,
            file_lists_dir=self.config.GJP_FILE_LISTS_DIR,
            src_dir=self.config.GJP_SRC_DIR,
        )

    @staticmethod
    def is_project(path: Path, config: ServiceConfig | None = None) -> bool:
        """Returns True if the directory holds the source, kit and git directories."""
        config = config or ServiceConfig()
        return (
            (path / config.GJP_SRC_DIR).is_dir()
            and (path / config.GJP_KIT_DIR).is_dir()
            and (path / ".git").is_dir()
        )

    @staticmethod
    def find_project_dir(starting_dir: Path, config: ServiceConfig | None = None) -> Path:
        """Finds the project directory up in the tree, like git does."""
        current_dir = starting_dir.resolve()
        while not Project.is_project(current_dir, config):
            if current_dir == current_dir.parent:
                raise InvalidProjectError(f"{starting_dir} is not inside a gjp project directory")
            current_dir = current_dir.parent
        return current_dir

    @classmethod
    def init(cls, path: str | Path, config: ServiceConfig | None = None, **kwargs) -> "Project":
        """
        Turns an existing directory into a project and starts a gathering phase.

        Raises:
            InvalidProjectError: If the directory is missing or already a project.
        """
        config = config or ServiceConfig()
        root = Path(path).expanduser().absolute()
        if not root.is_dir():
            raise InvalidProjectError(f"{root} is not a directory")
        if cls.is_project(root, config):
            raise InvalidProjectError(f"{root} is already a gjp project directory")

        if not (root / ".git").is_dir():
            GitRepository(root, git_binary=config.GJP_GIT_BINARY, echo=config.GJP_ECHO_COMMANDS).init()

        for directory, template_key in [
            (config.GJP_SRC_DIR, "src"),
            (config.GJP_KIT_DIR, "kit"),
            (config.GJP_FILE_LISTS_DIR, "file_lists"),
        ]:
            (root / directory).mkdir(exist_ok=True)
            placeholder = root / directory / PLACEHOLDER_NAME
            if not placeholder.exists():
                placeholder.write_text(PLACEHOLDER_TEXT[template_key])

        logger.info(f"initialized gjp project in {root}")
        project = cls(root, config=config, **kwargs)
        project.gather()
        return project

    @property
    def name(self) -> str:
        return self.full_path.name

    def version(self) -> str | None:
        """Returns the short hash of the latest finished dry-run, if any."""
        if not self.ledger.has_tag(TagType.DRY_RUN_FINISHED):
            return None
        return self.git.rev_parse(self.ledger.latest_tag(TagType.DRY_RUN_FINISHED), short=True)

    def get_status(self) -> Phase:
        return self.phase_store.read()

    def status(self) -> ProjectStatus:
        return ProjectStatus(
            name=self.name,
            root=self.full_path,
            phase=self.get_status(),
            version=self.version(),
            tag_counts={tag_type: self.ledger.latest_tag_count(tag_type) for tag_type in TagType},
        )

    def gather(self) -> bool:
        """
        Starts a gathering phase: files added to the project will be added to packages.

        A running dry-run is finished first.

        Returns:
            False if a gathering phase was already active.
        """
        return self._start(Phase.GATHERING, "Gathering started", TagType.GATHERING_STARTED)

    def dry_run(self) -> bool:
        """
        Starts a dry-running phase: files added to kit/ will be added to the kit
        package, src/ will be reset to its current state when finished.

        A running gathering phase is finished first.

        Returns:
            False if a dry-running phase was already active.
        """
        return self._start(Phase.DRY_RUNNING, "Dry-run started", TagType.DRY_RUN_STARTED)

    def finish(self) -> Phase:
        """
        Ends the active phase, generating file lists.

        Returns:
            The phase that was closed, or Phase.NONE if none was active.
        """
        with self.lock.hold():
            return self._finish()

    @contextmanager
    def ensure_dry_running(self, state: bool = True) -> Iterator[None]:
        """
        Runs a block only if the project is dry-running (or, with state=False, only if it is not).

        Raises:
            PhaseError: If the project is in the wrong phase. No phase is started or finished.
        """
        dry_running = self.get_status() == Phase.DRY_RUNNING
        if dry_running != state:
            if state:
                raise PhaseError("Please start a dry-run first, use gjp_dry_run")
            raise PhaseError("Please finish the dry-run first, use gjp_finish")
        yield

    def build(self, command: list[str]) -> str:
        """Runs a build command from the project root during a dry-run and returns its output."""
        with self.lock.hold(), self.ensure_dry_running():
            logger.info(f"running build in {self.full_path}: {command}")
            return run(command, echo=self.config.GJP_ECHO_COMMANDS, cwd=self.full_path)

    def _start(self, phase: Phase, message: str, tag_type: TagType) -> bool:
        with self.lock.hold():
            status = self.get_status()
            if status == phase:
                logger.info(f"{phase.value} phase already active in {self.full_path}")
                return False
            if status != Phase.NONE:
                self._finish()

            # the marker must be in place before the snapshot records it
            self.phase_store.write(phase)
            self.ledger.take_snapshot(message, tag_type)

        logger.info(f"{phase.value} phase started in {self.full_path}")
        return True

    def _finish(self) -> Phase:
        status = self.get_status()
        if status == Phase.GATHERING:
            self.ledger.take_snapshot("Changes during gathering")

            self._update_file_lists(INPUT_LIST_NAME, TagType.GATHERING_STARTED)
            self.ledger.take_snapshot("File list updates")

            self.phase_store.clear()
            self.ledger.take_snapshot("Gathering finished", TagType.GATHERING_FINISHED)
        elif status == Phase.DRY_RUNNING:
            self.ledger.take_snapshot("Changes during dry-run")

            self._update_file_lists(OUTPUT_LIST_NAME, TagType.DRY_RUN_STARTED)
            self.ledger.take_snapshot("File list updates")

            self.ledger.revert(self.config.GJP_SRC_DIR, TagType.DRY_RUN_STARTED)
            self.ledger.take_snapshot("Sources reverted as before dry-run")

            self.phase_store.clear()
            self.ledger.take_snapshot("Dry run finished", TagType.DRY_RUN_FINISHED)
        else:
            logger.info(f"no phase active in {self.full_path}, nothing to finish")
            return Phase.NONE

        logger.info(f"{status.value} phase finished in {self.full_path}")
        return status

    def _update_file_lists(self, src_list_name: str, since: TagType) -> None:
        self.file_lists.update_changed_file_list(self.config.GJP_KIT_DIR, KIT_LIST_NAME, since)
        self.file_lists.update_changed_src_file_list(src_list_name, since)
