"""
Main configuration class that composes all configs.
"""

import os

from dotenv import load_dotenv

from threadline.core.config.check_config import CheckConfig
from threadline.core.config.logging_config import LoggingConfig
from threadline.core.config.provider_config import SUPPORTED_PROVIDERS, AgentConfig, ProviderConfig
from threadline.core.config.repo_config import RepoConfig
from threadline.core.errors import ConfigurationError

# Load environment variables from a .env file
load_dotenv()


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.ai = ProviderConfig(
            provider=os.getenv("AI_PROVIDER", "openai"),
            api_key=os.getenv("OPENAI_API_KEY", ""),
            max_tokens=int(os.getenv("AI_MAX_TOKENS", "4096")),
            temperature=float(os.getenv("AI_TEMPERATURE", "0.1")),
            openai_model=os.getenv("OPENAI_MODEL"),
            openai_base_url=os.getenv("OPENAI_BASE_URL"),
            check_agent=AgentConfig(
                max_tokens=int(os.getenv("AI_CHECK_MAX_TOKENS", "2000")),
                temperature=float(os.getenv("AI_CHECK_TEMPERATURE", "0.1")),
            ),
        )

        self.check = CheckConfig(
            timeout_seconds=float(os.getenv("CHECK_TIMEOUT_SECONDS", "40")),
            trunk_branch=os.getenv("TRUNK_BRANCH", "main"),
            git_remote=os.getenv("GIT_REMOTE", "origin"),
            diff_context_lines=int(os.getenv("DIFF_CONTEXT_LINES", "200")),
        )

        self.repo_config = RepoConfig(
            rules_directory=os.getenv("RULES_DIRECTORY", "threadlines"),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file_path=os.getenv("LOG_FILE_PATH"),
        )

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        provider = (self.ai.provider or "").lower()
        if provider not in SUPPORTED_PROVIDERS:
            supported = ", ".join(SUPPORTED_PROVIDERS)
            errors.append(f"AI_PROVIDER '{self.ai.provider}' is not supported. Supported: {supported}")

        if provider == "openai" and not self.ai.api_key:
            errors.append("OPENAI_API_KEY is required for OpenAI provider")

        if self.check.timeout_seconds <= 0:
            errors.append("CHECK_TIMEOUT_SECONDS must be positive")

        if self.check.diff_context_lines < 0:
            errors.append("DIFF_CONTEXT_LINES cannot be negative")

        if errors:
            raise ConfigurationError(errors)

        return True


# Global config instance
config = Config()
