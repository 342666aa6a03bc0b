"""
Core error classes for Threadline.

Errors above the dispatch boundary (configuration, diff resolution, rule
loading) abort a whole check. Completion errors are contained to one task.
"""


class ThreadlineError(Exception):
    """Base class for all Threadline errors."""

    pass


class ConfigurationError(ThreadlineError):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration errors: {', '.join(errors)}")


# --- Diff resolution ---


class DiffResolutionError(ThreadlineError):
    """Raised when the diff for a check cannot be determined."""

    pass


class GitError(DiffResolutionError):
    """Raised when a git command fails."""

    def __init__(self, args: list[str], stderr: str = "") -> None:
        self.git_args = args
        self.stderr = stderr
        super().__init__(stderr or f"git {' '.join(args)} failed")


class NotAGitRepositoryError(DiffResolutionError):
    """Raised when the working directory is not inside a git repository."""

    pass


class MissingRefError(DiffResolutionError):
    """Raised when pull request context lacks a base or head ref."""

    pass


class MissingRemoteRefError(DiffResolutionError):
    """Raised when the trunk ref is not available on the remote."""

    pass


class AmbiguousEnvironmentError(DiffResolutionError):
    """Raised when a CI environment provides neither PR nor branch context."""

    pass


# --- Rule loading ---


class RuleLoadError(ThreadlineError):
    """Raised when rules cannot be loaded from a repository."""

    pass


class RulesDirectoryNotFoundError(RuleLoadError):
    """Raised when the rules directory does not exist."""

    pass


class NoRulesFoundError(RuleLoadError):
    """Raised when the rules directory holds no rule files."""

    pass


# --- Completion backend ---


class CompletionError(ThreadlineError):
    """Raised when the completion backend returns an unusable response."""

    pass


class NoResponseError(CompletionError):
    """Raised when the completion backend returns no content."""

    pass


class MalformedResponseError(CompletionError):
    """Raised when the completion backend returns content that is not a JSON object."""

    def __init__(self, message: str, content: str = "") -> None:
        self.content = content
        super().__init__(message)
