"""Configuration management for page-tree."""

import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from page_tree.utils import (
    CONTENT_ROOT_NAME,
    DEFAULT_MAX_DEPTH,
    INDEX_FILE_NAMES,
    MARKDOWN_EXTENSIONS,
    setup_logging,
)


DATA_DIR_NAME = ".page-tree"
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "page-tree.log"

Environment = Literal["test", "dev", "user"]


def _default_data_dir() -> Path:
    """App state directory, overridable with PAGE_TREE_CONFIG_DIR."""
    if config_dir := os.getenv("PAGE_TREE_CONFIG_DIR"):
        return Path(config_dir)
    home = os.getenv("HOME", Path.home())
    return Path(home) / DATA_DIR_NAME


class PageTreeConfig(BaseSettings):
    """Pydantic model for page-tree global configuration."""

    env: Environment = Field(default="dev", description="Environment name")

    # overridden by ~/.page-tree/config.json
    log_level: str = "INFO"

    # Content conventions
    index_file_names: List[str] = Field(
        default_factory=lambda: list(INDEX_FILE_NAMES),
        description="File names that turn their directory into a page. Earlier names win when a directory holds several.",
    )
    markdown_extensions: List[str] = Field(
        default_factory=lambda: list(MARKDOWN_EXTENSIONS),
        description="Extensions of files that become pages. Anything else is treated as an asset and left out of the page tree.",
    )
    content_root_name: str = Field(
        default=CONTENT_ROOT_NAME,
        description="Top-level directory holding site content. It is never shown as a folder of its own.",
    )
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        description="Maximum nesting depth. Deeper entries are excluded from both trees.",
        gt=0,
    )

    # Listing source (GitHub git trees API)
    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API",
    )
    github_owner: str = Field(
        default="hugotion",
        description="Account or organization owning one repository per document",
    )
    github_branch: str = Field(
        default="main",
        description="Branch whose tree is listed",
    )
    github_token: Optional[str] = Field(
        default=None,
        description="Token sent as a bearer credential. Anonymous requests are heavily rate limited.",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for a listing or content request",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGE_TREE_",
        extra="ignore",
    )

    @field_validator("index_file_names", "markdown_extensions")
    @classmethod
    def require_values(cls, value: List[str]) -> List[str]:
        """Reject empty lists; the page tree needs at least one of each."""
        cleaned = [item.strip() for item in value if item and item.strip()]
        if not cleaned:
            raise ValueError("at least one value is required")
        return cleaned

    @property
    def is_test_env(self) -> bool:
        """Check if running in a test environment."""
        return (
            self.env == "test"
            or os.getenv("PAGE_TREE_ENV", "").lower() == "test"
            or os.getenv("PYTEST_CURRENT_TEST") is not None
        )

    @property
    def data_dir_path(self) -> Path:
        """Get app state directory for config and logs."""
        return _default_data_dir()

    @property
    def log_file_path(self) -> Path:
        return self.data_dir_path / LOG_FILE_NAME


# Module-level cache for configuration
_CONFIG_CACHE: Optional[PageTreeConfig] = None


class ConfigManager:
    """Manages page-tree configuration."""

    def __init__(self) -> None:
        """Initialize the configuration manager."""
        self.config_dir = _default_data_dir()
        self.config_file = self.config_dir / CONFIG_FILE_NAME

        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

    @property
    def config(self) -> PageTreeConfig:
        """Get configuration, loading it lazily if needed."""
        return self.load_config()

    def load_config(self) -> PageTreeConfig:
        """Load configuration from file or create default.

        Environment variables take precedence over file config values.
        Uses module-level cache across ConfigManager instances.
        """
        global _CONFIG_CACHE

        if _CONFIG_CACHE is not None:
            return _CONFIG_CACHE

        if not self.config_file.exists():
            config = PageTreeConfig()
            self.save_config(config)
            return config

        try:
            file_data = json.loads(self.config_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {self.config_file}: {e}")
            raise SystemExit(
                f"Error: config file is not valid JSON: {self.config_file}\n"
                f"  {e}\n"
                f"Fix or delete the file and re-run."
            )

        # Env-based values win over the file for any field set in the environment
        env_dict = PageTreeConfig().model_dump()
        merged_data: dict[str, Any] = dict(file_data)
        for field_name in PageTreeConfig.model_fields.keys():
            if f"PAGE_TREE_{field_name.upper()}" in os.environ:
                merged_data[field_name] = env_dict[field_name]

        _CONFIG_CACHE = PageTreeConfig(**merged_data)
        return _CONFIG_CACHE

    def save_config(self, config: PageTreeConfig) -> None:
        """Save configuration to file and invalidate cache."""
        global _CONFIG_CACHE
        save_page_tree_config(self.config_file, config)
        _CONFIG_CACHE = None


def save_page_tree_config(file_path: Path, config: PageTreeConfig) -> None:
    """Save configuration to file."""
    try:
        config_dict = config.model_dump(mode="json")
        file_path.write_text(json.dumps(config_dict, indent=2))
    except OSError as e:  # pragma: no cover
        logger.error(f"Failed to save config: {e}")


def init_cli_logging() -> None:
    """Initialize logging for CLI commands - file only.

    CLI commands should not log to stdout to avoid interfering with
    command output and shell integration. Test runs get no log file.
    """
    config = PageTreeConfig()
    log_level = os.getenv("PAGE_TREE_LOG_LEVEL", "INFO")
    setup_logging(
        log_level=log_level,
        log_to_file=not config.is_test_env,
        log_file=config.log_file_path,
    )
