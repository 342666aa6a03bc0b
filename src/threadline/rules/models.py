from pydantic import Field

from threadline.core.models import WireModel


class Rule(WireModel):
    """A pattern-scoped, natural-language coding standard."""

    id: str
    version: str = ""  # informational only, never used for matching
    patterns: list[str] = Field(default_factory=list)
    content: str = ""
    context_files: list[str] = Field(default_factory=list)
    context_content: dict[str, str] = Field(default_factory=dict)
    file_path: str | None = None
