"""Tracks which files changed in a project subtree since a snapshot."""

import logging
from pathlib import Path

from gjp_mcp.models.project import TagType
from gjp_mcp.tools.project.git import EMPTY_TREE
from gjp_mcp.tools.project.snapshots import SnapshotLedger

logger = logging.getLogger(__name__)


class ChangedFileListTracker:
    """
    Maintains one sorted, deduplicated list of changed paths per tracked subtree.

    Lists are plain text files (one path per line) under the file lists
    directory and only ever grow.
    """

    def __init__(
        self,
        ledger: SnapshotLedger,
        root: Path,
        file_lists_dir: str = "file_lists",
        src_dir: str = "src",
    ) -> None:
        self.ledger = ledger
        self.root = root
        self.file_lists_dir = file_lists_dir
        self.src_dir = src_dir

    def list_path(self, list_name: str) -> Path:
        return self.root / self.file_lists_dir / list_name

    def read_list(self, list_name: str) -> list[str]:
        """Returns the persisted list, or an empty one if it was never written."""
        list_file = self.list_path(list_name)
        if not list_file.exists():
            return []
        return [line for line in list_file.read_text().split("\n") if line]

    def update_changed_file_list(self, directory: str, list_name: str, since: TagType) -> list[str]:
        """
        Adds the files changed in `directory` since the latest `since` tag to a list.

        Paths are stored relative to `directory`. Running it again without
        further changes leaves the file identical.

        Args:
            directory: The subtree to inspect, relative to the project root.
            list_name: The name of the list file to update.
            since: The tag type whose latest tag is the reference snapshot.

        Returns:
            The updated list.
        """
        # Without a reference tag every file counts as new.
        reference = self.ledger.latest_tag(since) if self.ledger.has_tag(since) else EMPTY_TREE

        prefix = directory.rstrip("/") + "/"
        changed = [
            name[len(prefix):]
            for name in self.ledger.git.diff_tree_names(reference, "HEAD")
            if name.startswith(prefix)
        ]

        new_tracked_files = sorted(set(self.read_list(list_name)) | set(changed))
        logger.debug(f"writing file list for {directory}: {new_tracked_files}")

        list_file = self.list_path(list_name)
        list_file.parent.mkdir(parents=True, exist_ok=True)
        list_file.write_text("".join(f"{name}\n" for name in new_tracked_files))
        return new_tracked_files

    def update_changed_src_file_list(self, list_name: str, since: TagType) -> dict[str, list[str]]:
        """
        Updates one list per package directory under the source root.

        Each `src/<package>` gets its own list named `<package>_<list_name>`.
        """
        src = self.root / self.src_dir
        results = {}
        for entry in sorted(src.iterdir()):
            if entry.is_dir():
                package_list = f"{entry.name}_{list_name}"
                results[package_list] = self.update_changed_file_list(
                    f"{self.src_dir}/{entry.name}", package_list, since
                )
        return results
