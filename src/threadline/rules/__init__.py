# Rules package

from threadline.rules.interface import RuleLoader
from threadline.rules.loader import FileSystemRuleLoader, load_context_content
from threadline.rules.models import Rule

__all__ = [
    "Rule",
    "RuleLoader",
    "FileSystemRuleLoader",
    "load_context_content",
]
