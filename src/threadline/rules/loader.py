"""
Filesystem rule loader.

Loads rules from markdown files with YAML front matter, implementing the
RuleLoader interface:

    ---
    id: sql-safety
    version: 1.0.0
    patterns: ["**/*.sql", "db/**"]
    context_files: [docs/db.md]
    ---
    Queries must be parameterised ...
"""

import re
from pathlib import Path
from typing import Any

import structlog
import yaml  # type: ignore

from threadline.core.config import config
from threadline.core.errors import NoRulesFoundError, RulesDirectoryNotFoundError
from threadline.rules.interface import RuleLoader
from threadline.rules.models import Rule

logger = structlog.get_logger()

REQUIRED_FIELDS = ("id", "version", "patterns")
_FRONT_MATTER = re.compile(r"\A---\n(?:(.*?)\n)?---\n?(.*)\Z", re.DOTALL)
_SEMVER = re.compile(r"^\d+\.\d+\.\d+")


class FileSystemRuleLoader(RuleLoader):
    """
    Loads rules from ``<repo_root>/<directory>/*.md``.
    Files that fail validation are skipped with a warning.
    """

    def __init__(self, directory: str | None = None, suffix: str | None = None) -> None:
        self.directory = directory or config.repo_config.rules_directory
        self.suffix = suffix or config.repo_config.rule_file_suffix

    async def get_rules(self, repo_root: Path) -> list[Rule]:
        repo_root = Path(repo_root)
        rules_dir = repo_root / self.directory

        if not rules_dir.is_dir():
            raise RulesDirectoryNotFoundError(
                f"No {self.directory}/ folder found. Create it and add rule files ending in {self.suffix}."
            )

        rule_files = sorted(path for path in rules_dir.iterdir() if path.is_file() and path.suffix == self.suffix)
        if not rule_files:
            raise NoRulesFoundError(f"No rule files found in {self.directory}/. Add {self.suffix} files to it.")

        rules = []
        for path in rule_files:
            rule, errors = parse_rule_file(path, repo_root)
            if rule is None:
                logger.warning("rule_file_skipped", file=path.name, errors=errors)
                continue
            rules.append(rule)

        logger.info("rules_loaded", directory=self.directory, count=len(rules), files=len(rule_files))
        return rules


def parse_rule_file(path: Path, repo_root: Path) -> tuple[Rule | None, list[str]]:
    """Parse and validate one rule file, returning the rule or the list of problems."""
    try:
        text = path.read_text(encoding="utf-8").replace("\r\n", "\n")
    except OSError as e:
        return None, [f"Failed to read rule file: {e}"]

    match = _FRONT_MATTER.match(text)
    if not match:
        return None, ["Missing YAML front matter. Rule files must start with ---"]

    try:
        front_matter = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError as e:
        return None, [f"Invalid YAML front matter: {e}"]

    if not isinstance(front_matter, dict):
        return None, ["YAML front matter must be a mapping"]

    body = match.group(2).strip()
    errors = _validate(front_matter, body, repo_root)
    if errors:
        return None, errors

    rule = Rule(
        id=str(front_matter["id"]),
        version=str(front_matter["version"]),
        patterns=list(front_matter["patterns"]),
        content=body,
        context_files=list(front_matter.get("context_files") or []),
        file_path=path.relative_to(repo_root).as_posix(),
    )
    return rule, []


def _validate(front_matter: dict[str, Any], body: str, repo_root: Path) -> list[str]:
    errors = [f"Missing required field: {field}" for field in REQUIRED_FIELDS if not front_matter.get(field)]

    patterns = front_matter.get("patterns")
    if patterns is not None:
        if not isinstance(patterns, list):
            errors.append("patterns must be an array")
        elif not patterns:
            errors.append("patterns array cannot be empty")
        elif not all(isinstance(pattern, str) and pattern for pattern in patterns):
            errors.append("patterns must be non-empty strings")

    context_files = front_matter.get("context_files")
    if context_files is not None:
        if not isinstance(context_files, list):
            errors.append("context_files must be an array")
        else:
            for context_file in context_files:
                if not _is_inside(repo_root, str(context_file)):
                    errors.append(f"Context file not found: {context_file}")

    if not body:
        errors.append("Rule body cannot be empty")

    version = front_matter.get("version")
    if version and not _SEMVER.match(str(version)):
        errors.append("version must be in semver format (e.g., 1.0.0)")

    return errors


def _is_inside(repo_root: Path, relative: str) -> bool:
    root = repo_root.resolve()
    candidate = (root / relative).resolve()
    return candidate.is_file() and candidate.is_relative_to(root)


def load_context_content(rule: Rule, repo_root: Path) -> Rule:
    """Return a copy of the rule with context_content read from its context files."""
    repo_root = Path(repo_root)
    content: dict[str, str] = {}
    for context_file in rule.context_files:
        if not _is_inside(repo_root, context_file):
            logger.warning("context_file_missing", rule_id=rule.id, file=context_file)
            continue
        content[context_file] = (repo_root / context_file).read_text(encoding="utf-8")
    return rule.model_copy(update={"context_content": content})
