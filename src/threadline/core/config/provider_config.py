"""
Provider configuration.
"""

from dataclasses import dataclass
from typing import cast

SUPPORTED_PROVIDERS = ("openai",)


@dataclass
class AgentConfig:
    """Per-agent configuration."""

    max_tokens: int = 4096
    temperature: float = 0.1


@dataclass
class ProviderConfig:
    """Completion provider configuration."""

    api_key: str
    provider: str = "openai"
    max_tokens: int = 4096
    temperature: float = 0.1
    openai_model: str | None = None
    openai_base_url: str | None = None
    # Per-agent configurations
    check_agent: AgentConfig | None = None

    def get_model_for_provider(self, provider: str) -> str:
        """Get the appropriate model for the given provider with fallbacks."""
        provider = provider.lower()

        if provider == "openai":
            return self.openai_model or "gpt-4o-mini"
        return "gpt-4o-mini"

    def get_max_tokens_for_agent(self, agent: str | None = None) -> int:
        """Get max tokens for agent with fallback to global config."""
        if agent and hasattr(self, agent):
            agent_config = getattr(self, agent)
            if agent_config and isinstance(agent_config, AgentConfig):
                return int(cast("int", agent_config.max_tokens))
        return int(self.max_tokens)

    def get_temperature_for_agent(self, agent: str | None = None) -> float:
        """Get temperature for agent with fallback to global config."""
        if agent and hasattr(self, agent):
            agent_config = getattr(self, agent)
            if agent_config and isinstance(agent_config, AgentConfig):
                return float(cast("float", agent_config.temperature))
        return float(self.temperature)
