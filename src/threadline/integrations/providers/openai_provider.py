"""
OpenAI Provider implementation.
"""

from typing import Any

from langchain_openai import ChatOpenAI

from threadline.integrations.providers.base import BaseProvider

# Models served without response_format support
_NO_JSON_MODE_PREFIXES = ("o1-mini", "o1-preview")


class OpenAIProvider(BaseProvider):
    """OpenAI Provider."""

    def get_chat_model(self) -> Any:
        """Get OpenAI chat model, bound to JSON-object responses when the model supports it."""
        extra = {k: v for k, v in self.kwargs.items() if k not in ("api_key", "base_url") and v is not None}
        model = ChatOpenAI(
            model=self.model,
            max_tokens=self.max_tokens,  # type: ignore[call-arg]
            temperature=self.temperature,
            api_key=self.kwargs.get("api_key"),
            base_url=self.kwargs.get("base_url"),
            **extra,
        )
        if not self.supports_json_mode():
            return model
        return model.bind(response_format={"type": "json_object"})

    def supports_json_mode(self) -> bool:
        """JSON mode is available on every OpenAI chat model except the early o1 previews."""
        return not self.model.startswith(_NO_JSON_MODE_PREFIXES)
