"""
Prompt building and the completion client.
"""

from threadline.llm.client import CompletionClient, build_completion_client
from threadline.llm.prompts import create_evaluation_prompt, get_evaluation_system_prompt

__all__ = [
    "CompletionClient",
    "build_completion_client",
    "create_evaluation_prompt",
    "get_evaluation_system_prompt",
]
