from abc import ABC, abstractmethod
from pathlib import Path

from threadline.rules.models import Rule


class RuleLoader(ABC):
    """
    Abstract interface for fetching rules from a repository.

    This interface allows us to swap out different rule sources
    (files on disk, a remote service, etc.) without changing the check logic.
    """

    @abstractmethod
    async def get_rules(self, repo_root: Path) -> list[Rule]:
        """
        Fetch rules for a repository.

        Args:
            repo_root: Root directory of the repository checkout

        Returns:
            list of Rule objects for the repository
        """
        pass
