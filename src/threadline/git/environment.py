"""
CI environment detection.

The environment is read once at the process boundary and handed to the diff
resolver as an immutable value; nothing downstream looks at os.environ.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class CIProvider(str, Enum):
    """Where a check is running."""

    GITHUB = "github"
    GITLAB = "gitlab"
    VERCEL = "vercel"
    LOCAL = "local"


@dataclass(frozen=True)
class Environment:
    """Signals the diff resolver needs to pick a comparison strategy."""

    provider: CIProvider = CIProvider.LOCAL
    is_pull_request: bool = False
    base_ref: str | None = None
    head_ref: str | None = None
    ref_name: str | None = None
    commit_sha: str | None = None

    @property
    def is_ci(self) -> bool:
        return self.provider != CIProvider.LOCAL

    @classmethod
    def local(cls) -> "Environment":
        return cls()

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Environment":
        """Build an Environment from CI variables (GitHub Actions, GitLab CI, Vercel)."""

        def get(key: str) -> str | None:
            value = environ.get(key, "").strip()
            return value or None

        if get("GITHUB_ACTIONS") == "true":
            return cls(
                provider=CIProvider.GITHUB,
                is_pull_request=get("GITHUB_EVENT_NAME") in ("pull_request", "pull_request_target"),
                base_ref=get("GITHUB_BASE_REF"),
                head_ref=get("GITHUB_HEAD_REF"),
                ref_name=get("GITHUB_REF_NAME"),
                commit_sha=get("GITHUB_SHA"),
            )

        if get("GITLAB_CI") == "true":
            return cls(
                provider=CIProvider.GITLAB,
                is_pull_request=get("CI_MERGE_REQUEST_IID") is not None,
                base_ref=get("CI_MERGE_REQUEST_TARGET_BRANCH_NAME"),
                head_ref=get("CI_MERGE_REQUEST_SOURCE_BRANCH_NAME"),
                ref_name=get("CI_COMMIT_REF_NAME"),
                commit_sha=get("CI_COMMIT_SHA"),
            )

        if get("VERCEL") == "1":
            return cls(
                provider=CIProvider.VERCEL,
                ref_name=get("VERCEL_GIT_COMMIT_REF"),
                commit_sha=get("VERCEL_GIT_COMMIT_SHA"),
            )

        return cls.local()


def detect_environment(environ: Mapping[str, str] | None = None) -> Environment:
    """Detect the current environment; defaults to the process environment."""
    return Environment.from_env(os.environ if environ is None else environ)
