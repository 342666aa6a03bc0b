"""
Git subprocess client.

Thin wrapper over the git binary; every failing invocation becomes a GitError
carrying git's stderr.
"""

from pathlib import Path
from subprocess import CalledProcessError, run

import structlog

from threadline.core.errors import GitError

logger = structlog.get_logger()


class GitClient:
    """Runs git commands inside one repository."""

    def __init__(self, repo_root: Path | str) -> None:
        self.repo_root = Path(repo_root)

    def run(self, args: list[str]) -> str:
        """Run ``git <args>`` and return stdout."""
        logger.debug("git_command", args=args, cwd=str(self.repo_root))
        try:
            completed = run(
                ["git", *args],
                cwd=self.repo_root,
                check=True,
                capture_output=True,
                text=True,
            )
        except CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitError(args, stderr) from exc
        except FileNotFoundError as exc:
            raise GitError(args, "git executable not found") from exc

        return completed.stdout

    def is_repository(self) -> bool:
        try:
            return self.run(["rev-parse", "--is-inside-work-tree"]).strip() == "true"
        except GitError:
            return False

    def ref_exists(self, ref: str) -> bool:
        try:
            self.run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])
        except GitError:
            return False
        return True

    def parent_shas(self, revision: str) -> list[str]:
        """Return the parent commit hashes of a revision."""
        output = self.run(["log", "-1", "--format=%P", revision]).strip()
        return output.split() if output else []

    def status_entries(self) -> list[tuple[str, str, str]]:
        """Parse ``git status --porcelain`` into (index, worktree, path) tuples."""
        entries = []
        for line in self.run(["status", "--porcelain"]).splitlines():
            if len(line) < 4:
                continue
            entries.append((line[0], line[1], line[3:]))
        return entries

    def diff(self, args: list[str]) -> str:
        return self.run(["diff", "--no-color", *args])

    def changed_files(self, args: list[str]) -> list[str]:
        """Return the file names a ``git diff`` with the same args would touch."""
        output = self.run(["diff", "--name-only", *args])
        return [line for line in output.splitlines() if line.strip()]
