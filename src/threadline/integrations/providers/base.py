"""
Base Provider interface.

This module defines the abstract base class that all providers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any


class BaseProvider(ABC):
    """Base class for completion providers."""

    def __init__(self, model: str, max_tokens: int = 4096, temperature: float = 0.1, **kwargs: Any) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.kwargs = kwargs

    @abstractmethod
    def get_chat_model(self) -> Any:
        """Get the chat model instance, constrained to JSON answers where the backend allows it."""
        pass

    @abstractmethod
    def supports_json_mode(self) -> bool:
        """Check if this provider's model can be forced to answer with a JSON object."""
        pass
