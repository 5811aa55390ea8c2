import logging
import re

from gjp_mcp.models.project import TagType
from gjp_mcp.tools.project.git import GitRepository

logger = logging.getLogger(__name__)


class SnapshotLedger:
    """
    Commits the whole working tree and keeps an append-only ledger of tags.

    Tags are named `<prefix><tag_type>_<n>` where `n` grows by one for each
    new tag of the same type.
    """

    def __init__(self, git: GitRepository, tag_prefix: str = "gjp_") -> None:
        self.git = git
        self.tag_prefix = tag_prefix

    def take_snapshot(self, message: str, tag_type: TagType | None = None) -> str | None:
        """
        Commits the project's whole contents, tagging the commit if a tag type is given.

        Returns:
            The name of the new tag, or None if the snapshot is untagged.
        """
        logger.debug(f"committing with message: {message}")
        self.git.add_all()
        self.git.commit(message)

        if tag_type is None:
            return None

        tag = self._tag_name(tag_type, self.latest_tag_count(tag_type) + 1)
        self.git.tag(tag)
        logger.info(f"snapshot tagged {tag}")
        return tag

    def latest_tag_count(self, tag_type: TagType) -> int:
        """Returns the highest counter among existing tags of a type, 0 if there are none."""
        pattern = re.compile(rf"^{re.escape(self.tag_prefix + tag_type.value)}_([0-9]+)$")
        counts = [
            int(match.group(1))
            for match in (pattern.match(tag) for tag in self.git.list_tags())
            if match
        ]
        return max(counts, default=0)

    def latest_tag(self, tag_type: TagType) -> str:
        """
        Returns the name of the latest tag of a type.

        When no such tag exists yet the `_0` name is returned, which does not
        resolve to any commit.
        """
        return self._tag_name(tag_type, self.latest_tag_count(tag_type))

    def has_tag(self, tag_type: TagType) -> bool:
        return self.latest_tag_count(tag_type) > 0

    def revert(self, path: str, tag_type: TagType) -> None:
        """Restores `path` to its contents at the latest tag of a type, dropping untracked files."""
        tag = self.latest_tag(tag_type)
        logger.info(f"reverting {path} to {tag}")

        self.git.remove(path)
        if self.has_tag(tag_type) and self.git.list_tree_names(tag, path):
            self.git.checkout(tag, path)

        # git does not track empty directories, the subtree itself must survive
        (self.git.root / path).mkdir(parents=True, exist_ok=True)
        self.git.clean(path)

    def _tag_name(self, tag_type: TagType, count: int) -> str:
        return f"{self.tag_prefix}{tag_type.value}_{count}"
