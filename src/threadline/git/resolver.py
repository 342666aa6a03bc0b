"""
Diff resolution.

Chooses what "the change" means for the environment a check runs in and
returns it as a DiffContext. States are tried in a fixed order and the first
match wins:

1. Pull request: ``remote/base...remote/head``.
2. Merge to trunk (trunk push whose tip has more than one parent):
   ``remote/trunk~1...remote/trunk``, the cumulative merged change.
3. Branch push: ``remote/trunk...remote/ref``, everything on the branch.
4. Local: staged changes, else unstaged changes, else nothing.

CI states always compare against a stable base rather than the last commit,
so a fix committed late in a branch is weighed against the violation it
removes. Every CI failure raises; only the local state may yield an empty
diff.
"""

import structlog

from threadline.core.errors import (
    AmbiguousEnvironmentError,
    GitError,
    MissingRefError,
    MissingRemoteRefError,
    NotAGitRepositoryError,
)
from threadline.core.models import DiffContext, EnvironmentKind
from threadline.git.client import GitClient
from threadline.git.environment import Environment

logger = structlog.get_logger()


class DiffResolver:
    """Resolves the DiffContext for one check."""

    def __init__(
        self,
        git: GitClient,
        environment: Environment,
        trunk: str = "main",
        remote: str = "origin",
        context_lines: int = 200,
    ) -> None:
        self.git = git
        self.environment = environment
        self.trunk = trunk
        self.remote = remote
        self.context_lines = context_lines

    def resolve(self) -> DiffContext:
        if not self.git.is_repository():
            raise NotAGitRepositoryError(
                f"{self.git.repo_root} is not a git repository. Threadline requires a git repository."
            )

        env = self.environment

        if env.is_pull_request:
            return self._resolve_pull_request()

        if env.ref_name == self.trunk and env.commit_sha:
            merged = self._resolve_merge_to_trunk(env.commit_sha)
            if merged is not None:
                return merged

        if env.ref_name:
            return self._resolve_branch_push(env.ref_name)

        if env.is_ci:
            raise AmbiguousEnvironmentError(
                f"{env.provider.value} environment detected but no valid context found: "
                "expected pull request refs or a branch name."
            )

        return self._resolve_local()

    def _remote_ref(self, ref: str) -> str:
        return f"{self.remote}/{ref}"

    def _compare(self, range_spec: str, kind: EnvironmentKind) -> DiffContext:
        diff_text = self.git.diff([f"-U{self.context_lines}", range_spec])
        changed_files = self.git.changed_files([range_spec])
        logger.info("diff_resolved", environment=kind.value, range=range_spec, changed_files=len(changed_files))
        return DiffContext(diff_text=diff_text, changed_files=changed_files, environment=kind)

    def _resolve_pull_request(self) -> DiffContext:
        base_ref = self.environment.base_ref
        head_ref = self.environment.head_ref
        if not base_ref or not head_ref:
            missing = [name for name, value in (("base", base_ref), ("head", head_ref)) if not value]
            raise MissingRefError(
                f"Pull request context detected but the {' and '.join(missing)} ref is missing. "
                "The CI provider should supply both."
            )

        range_spec = f"{self._remote_ref(base_ref)}...{self._remote_ref(head_ref)}"
        return self._compare(range_spec, EnvironmentKind.PR)

    def _resolve_merge_to_trunk(self, commit_sha: str) -> DiffContext | None:
        try:
            parents = self.git.parent_shas(commit_sha)
        except GitError as e:
            # TODO: decide whether a failed parent lookup should abort instead of degrading
            logger.warning(
                "merge_detection_failed",
                commit_sha=commit_sha,
                error=str(e),
                fallback=EnvironmentKind.BRANCH_PUSH.value,
            )
            return None

        if len(parents) <= 1:
            return None

        trunk = self._remote_ref(self.trunk)
        return self._compare(f"{trunk}~1...{trunk}", EnvironmentKind.MERGE_TO_MAIN)

    def _resolve_branch_push(self, ref_name: str) -> DiffContext:
        trunk = self._remote_ref(self.trunk)
        if not self.git.ref_exists(trunk):
            raise MissingRemoteRefError(
                f"{trunk} is not available. Fetch full history (e.g. fetch-depth: 0) so the branch "
                "can be compared against the trunk."
            )

        return self._compare(f"{trunk}...{self._remote_ref(ref_name)}", EnvironmentKind.BRANCH_PUSH)

    def _resolve_local(self) -> DiffContext:
        entries = self.git.status_entries()
        has_staged = any(index not in (" ", "?") for index, _, _ in entries)
        has_unstaged = any(worktree != " " for _, worktree, _ in entries)

        if has_staged:
            args = ["--cached"]
        elif has_unstaged:
            args = []
        else:
            logger.info("diff_resolved", environment=EnvironmentKind.LOCAL.value, changed_files=0)
            return DiffContext(environment=EnvironmentKind.LOCAL)

        diff_text = self.git.diff(args)
        changed_files = self.git.changed_files(args)
        logger.info(
            "diff_resolved",
            environment=EnvironmentKind.LOCAL.value,
            staged=has_staged,
            changed_files=len(changed_files),
        )
        return DiffContext(diff_text=diff_text, changed_files=changed_files, environment=EnvironmentKind.LOCAL)
