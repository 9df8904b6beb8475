"""
Configuration Manager

Handles hierarchical configuration loading, validation, and management
with support for CLI args → environment variables → config files → defaults.
"""

import os
import json
import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Union, List
from pydantic import ValidationError

from boardcache.core.config.models import AppConfig, CacheConfig, SideListConfig
from boardcache.core.exceptions import ConfigurationError, ErrorCode


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages application configuration with hierarchical loading and validation.

    Configuration sources in order of precedence:
    1. CLI arguments (highest priority)
    2. Environment variables
    3. Configuration files
    4. Default values (lowest priority)
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[AppConfig] = None
        self._config_paths = self._get_default_config_paths()

    def _get_default_config_paths(self) -> List[Path]:
        """Get default configuration file search paths."""
        search_paths = [
            Path.cwd() / "boardcache.yaml",
            Path.cwd() / "boardcache.yml",
            Path.cwd() / ".boardcache.yaml",
            Path.cwd() / ".boardcache.yml",
            Path.home() / ".boardcache" / "config.yaml",
            Path.home() / ".config" / "boardcache" / "config.yaml",
        ]

        xdg_config = os.environ.get('XDG_CONFIG_HOME')
        if xdg_config:
            search_paths.append(Path(xdg_config) / "boardcache" / "config.yaml")

        return search_paths

    def load_config(
        self,
        cli_args: Optional[Dict[str, Any]] = None,
        env_prefix: str = "BOARDCACHE_"
    ) -> AppConfig:
        """
        Load and validate configuration from all sources.

        Args:
            cli_args: Dictionary of CLI arguments
            env_prefix: Prefix for environment variables

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_data = {}

        file_config = self._load_config_file()
        if file_config:
            config_data.update(file_config)

        env_config = self._load_env_config(env_prefix)
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        if cli_args:
            cli_config = self._normalize_cli_args(cli_args)
            config_data = self._deep_merge(config_data, cli_config)

        try:
            self._config = AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                error_code=ErrorCode.CONFIG_SCHEMA_VALIDATION,
                cause=e
            )

        logger.debug(
            f"Loaded configuration: article_count={self._config.cache.article_count}, "
            f"hot={self._config.side_lists.hot_articles_count}, "
            f"random={self._config.side_lists.random_articles_count}"
        )
        return self._config

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        config_file = self.config_file

        # If no specific file provided, search default locations
        if not config_file:
            for path in self._config_paths:
                if path.exists() and path.is_file():
                    config_file = path
                    break

        if not config_file:
            return None

        if not config_file.exists():
            raise ConfigurationError(
                f"Config file not found: {config_file}",
                error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                config_key="config_file",
                config_value=str(config_file)
            )

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix.lower() in {'.yaml', '.yml'}:
                    data = yaml.safe_load(f) or {}
                elif config_file.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    # Try YAML first, then JSON
                    content = f.read()
                    try:
                        data = yaml.safe_load(content) or {}
                    except yaml.YAMLError:
                        data = json.loads(content)
        except (IOError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config file {config_file}: {e}",
                error_code=ErrorCode.CONFIG_INVALID_FORMAT,
                cause=e
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_file} must contain a mapping",
                error_code=ErrorCode.CONFIG_INVALID_FORMAT
            )

        logger.debug(f"Loaded config file {config_file}")
        return data

    def _load_env_config(self, prefix: str) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}

        env_mappings = {
            # Cache configuration
            f"{prefix}ARTICLE_CACHE_SIZE": ("cache", "article_count", int),
            f"{prefix}ABSTRACT_CACHE_SIZE": ("cache", "abstract_count", int),
            f"{prefix}METRICS_ENABLED": ("cache", "metrics_enabled", self._parse_bool),

            # Side list configuration
            f"{prefix}SIDE_HOT_ARTICLES": ("side_lists", "hot_articles_count", int),
            f"{prefix}SIDE_RANDOM_ARTICLES": ("side_lists", "random_articles_count", int),
            f"{prefix}HOT_WINDOW_DAYS": ("side_lists", "hot_window_days", int),

            # General settings
            f"{prefix}LOG_LEVEL": ("log_level", None, str),
            f"{prefix}VERBOSE": ("verbose", None, self._parse_bool),
            f"{prefix}DEBUG": ("debug", None, self._parse_bool),
        }

        for env_var, (section, key, parser) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                try:
                    parsed_value = parser(value)
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(
                        f"Invalid value for {env_var}: {value} ({e})",
                        config_key=env_var,
                        config_value=value
                    )
                if key is None:
                    env_config[section] = parsed_value
                else:
                    env_config.setdefault(section, {})[key] = parsed_value

        return env_config

    def _normalize_cli_args(self, cli_args: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize CLI arguments to configuration structure."""
        normalized = {}

        cli_mappings = {
            'verbose': 'verbose',
            'debug': 'debug',
            'log_level': 'log_level',

            'article_cache_size': ('cache', 'article_count'),
            'abstract_cache_size': ('cache', 'abstract_count'),
            'metrics': ('cache', 'metrics_enabled'),

            'hot_count': ('side_lists', 'hot_articles_count'),
            'random_count': ('side_lists', 'random_articles_count'),
            'hot_window_days': ('side_lists', 'hot_window_days'),
        }

        for cli_key, value in cli_args.items():
            if value is None:
                continue

            mapping = cli_mappings.get(cli_key)
            if mapping:
                if isinstance(mapping, tuple):
                    section, key = mapping
                    normalized.setdefault(section, {})[key] = value
                else:
                    normalized[mapping] = value

        return normalized

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _parse_bool(value: Union[str, bool]) -> bool:
        """Parse boolean value from string."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {'true', '1', 'yes', 'on', 'enabled'}
        return bool(value)

    def validate_config(self, config: Optional[AppConfig] = None) -> List[str]:
        """
        Validate configuration and return list of warnings.

        Args:
            config: Configuration to validate (uses loaded config if None)

        Returns:
            List of validation warnings
        """
        if config is None:
            config = self._config

        if config is None:
            return ["No configuration loaded"]

        warnings = []

        if config.cache.abstract_count > config.cache.article_count:
            warnings.append(
                "abstract_count exceeds article_count; abstracts are purged with their articles"
            )

        side_total = config.side_lists.hot_articles_count + config.side_lists.random_articles_count
        if side_total > config.cache.article_count:
            warnings.append(
                "Side lists hold more entries than the article cache capacity"
            )

        if config.debug and not config.cache.metrics_enabled:
            warnings.append("Debug mode is on but cache metrics are disabled")

        return warnings

    def generate_schema(self, output_file: Optional[Path] = None) -> Dict[str, Any]:
        """
        Generate JSON schema for configuration.

        Args:
            output_file: Optional file to write schema to

        Returns:
            JSON schema dictionary
        """
        schema = AppConfig.model_json_schema()

        if output_file:
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(schema, f, indent=2)

        return schema

    def create_example_config(self, output_file: Path, profile: str = "default") -> None:
        """
        Create example configuration file.

        Args:
            output_file: Path to write configuration file
            profile: Configuration profile (default, small, large)

        Raises:
            ConfigurationError: If the profile is unknown
        """
        if profile == "small":
            config = AppConfig(
                cache=CacheConfig(article_count=128),
                side_lists=SideListConfig(hot_articles_count=5, random_articles_count=5)
            )
        elif profile == "large":
            config = AppConfig(
                cache=CacheConfig(article_count=8192, abstract_count=4096),
                side_lists=SideListConfig(hot_articles_count=20, random_articles_count=20)
            )
        elif profile == "default":
            config = AppConfig()
        else:
            raise ConfigurationError(
                f"Unknown configuration profile: {profile}",
                config_key="profile",
                config_value=profile
            )

        config_dict = config.model_dump(mode='json')

        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    @property
    def config(self) -> Optional[AppConfig]:
        """Get the loaded configuration."""
        return self._config
