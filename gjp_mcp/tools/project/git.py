"""Thin typed wrapper around the git command line."""

import logging
from pathlib import Path

from gjp_mcp.tools.run import run

logger = logging.getLogger(__name__)

# The well-known id of git's empty tree, used to diff against "nothing".
EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


class GitRepository:
    """
    Builds git argument vectors and runs them against one repository.

    Every command is scoped with `git -C <root>` so the process working
    directory is never changed.
    """

    def __init__(self, root: Path, git_binary: str = "git", echo: bool = False) -> None:
        self.root = root
        self.git_binary = git_binary
        self.echo = echo

    def _git(self, *args: str | Path, fail_on_error: bool = True) -> str:
        return run(
            [self.git_binary, "-C", self.root, *args],
            echo=self.echo,
            fail_on_error=fail_on_error,
        )

    def init(self) -> None:
        self._git("init")

    def add_all(self) -> None:
        """Stages every change in the working tree, deletions and ignored files included."""
        self._git("add", "-A", "--force", ".")

    def commit(self, message: str) -> None:
        self._git("commit", "--allow-empty", "--quiet", "-m", message)

    def tag(self, name: str) -> None:
        self._git("tag", name)

    def list_tags(self) -> list[str]:
        return self._git("tag", "--list").split()

    def diff_tree_names(self, from_revision: str, to_revision: str = "HEAD") -> list[str]:
        """Lists paths added or modified between two revisions, relative to the root."""
        output = self._git(
            "diff-tree", "-r", "-z", "--no-commit-id", "--name-only", "--diff-filter=d",
            from_revision, to_revision,
        )
        return [name for name in output.split("\0") if name]

    def list_tree_names(self, revision: str, path: str) -> list[str]:
        output = self._git("ls-tree", "-r", "-z", "--name-only", revision, "--", path)
        return [name for name in output.split("\0") if name]

    def remove(self, path: str) -> None:
        """Removes a path from both the index and the working tree."""
        self._git("rm", "-r", "-f", "-q", "--ignore-unmatch", "--", path)

    def checkout(self, revision: str, path: str) -> None:
        self._git("checkout", "-f", revision, "--", path)

    def clean(self, path: str) -> None:
        """Deletes untracked files under a path, ignored ones included."""
        self._git("clean", "-f", "-d", "-x", "-q", "--", path)

    def rev_parse(self, revision: str, short: bool = False) -> str | None:
        """Resolves a revision to a commit hash, or None if it does not exist."""
        args = ["rev-parse", "--verify", "--quiet"]
        if short:
            args.append("--short")
        output = self._git(*args, f"{revision}^{{commit}}", fail_on_error=False).strip()
        return output or None
