"""
Provider integrations for completion backends.

The main entry points are the factory functions:
- get_provider() - Get a provider instance
- get_chat_model() - Get a ready-to-use chat model
"""

from threadline.integrations.providers.factory import get_chat_model, get_provider

__all__ = [
    "get_provider",
    "get_chat_model",
]
