"""Configuration management using Pydantic for validation."""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository root; build paths resolve against it regardless of the caller's cwd.
DEFAULT_BASE_DIR = Path(__file__).resolve().parents[2]


class PathsConfig(BaseModel):
    """Input/output locations and public URL prefixes."""

    base_dir: Path = Field(default=DEFAULT_BASE_DIR)
    projects_dir: Path = Field(default=Path("public/projects"))
    icons_dir: Path = Field(default=Path("public/icons"))
    output_path: Path = Field(default=Path("public/projects.json"))
    projects_url_prefix: str = "/portfolio/projects"
    icons_url_prefix: str = "/portfolio/icons"

    @field_validator("projects_url_prefix", "icons_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """URL prefixes are joined with '/' so a trailing slash is dropped."""
        return v.rstrip("/")

    def resolve(self, path: str | Path) -> Path:
        """Resolve a configured path against ``base_dir`` when it is relative."""
        path = Path(path)
        if path.is_absolute():
            return path
        return Path(self.base_dir) / path


class SourceConfig(BaseModel):
    """Filesystem source settings (sidecar name and media classification)."""

    sidecar_filename: str = "project.yml"
    image_extensions: List[str] = [".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"]
    video_extensions: List[str] = [".mp4", ".webm", ".mov", ".avi", ".mkv"]
    thumbnail_extensions: List[str] = [".jpg", ".jpeg", ".png", ".webp"]
    icon_extensions: List[str] = [".svg", ".png"]
    thumbnail_suffix: str = "-thumb"
    default_image_layout: str = "grid"

    @field_validator(
        "image_extensions", "video_extensions", "thumbnail_extensions", "icon_extensions"
    )
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Extensions are matched lower-cased and with a leading dot."""
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]


class DatabaseConfig(BaseSettings):
    """SQLite store configuration from environment variables."""

    model_config = SettingsConfigDict(env_prefix="PORTFOLIO_", case_sensitive=False)

    db_path: Path = Field(default=Path("projects.db"))
    seed_sample_data: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    rotation: str = "10 MB"
    retention: str = "1 week"


class Config(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    sources: SourceConfig = Field(default_factory=SourceConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def projects_dir(self) -> Path:
        return self.paths.resolve(self.paths.projects_dir)

    @property
    def icons_dir(self) -> Path:
        return self.paths.resolve(self.paths.icons_dir)

    @property
    def output_path(self) -> Path:
        return self.paths.resolve(self.paths.output_path)

    @property
    def db_path(self) -> Path:
        return self.paths.resolve(self.database.db_path)

    @staticmethod
    def _deep_merge_dict(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Deep-merge two dicts (overrides win).

        This is used to apply environment-derived overrides on top of YAML defaults.
        """
        merged: Dict[str, Any] = dict(base)
        for key, value in overrides.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge_dict(merged[key], value)
            else:
                merged[key] = value
        return merged

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = "config/config.yaml") -> "Config":
        """Load configuration from YAML file and environment variables.

        Precedence (highest to lowest):
        1) Environment variables / .env
        2) YAML file
        3) Model defaults

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance with loaded settings

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML file is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        if not isinstance(yaml_config, dict):
            raise ValueError(f"YAML config root must be a mapping/dict: {yaml_path}")

        # Only non-default env values are layered over the YAML. The nested
        # DatabaseConfig reads its own PORTFOLIO_DB_PATH style variables, which
        # the parent model does not see, so those are merged in explicitly.
        env_overrides = cls().model_dump(exclude_defaults=True)

        db_env_overrides = DatabaseConfig().model_dump(exclude_defaults=True)
        if db_env_overrides:
            env_overrides["database"] = cls._deep_merge_dict(
                (
                    yaml_config.get("database", {})
                    if isinstance(yaml_config.get("database", {}), dict)
                    else {}
                ),
                db_env_overrides,
            )

        merged = cls._deep_merge_dict(yaml_config, env_overrides)

        return cls(**merged)

    def validate_config(self) -> None:
        """Validate configuration settings.

        Raises:
            ValueError: If configuration is invalid
        """
        if not Path(self.paths.base_dir).is_dir():
            raise ValueError(f"Base directory does not exist: {self.paths.base_dir}")

        overlap = set(self.sources.image_extensions) & set(self.sources.video_extensions)
        if overlap:
            raise ValueError(
                f"Extensions cannot be both image and video: {', '.join(sorted(overlap))}"
            )


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create global configuration instance.

    Returns:
        Global Config instance

    Raises:
        RuntimeError: If configuration hasn't been initialized
    """
    global _config
    if _config is None:
        raise RuntimeError("Configuration not initialized. Call load_config() first.")
    return _config


def load_config(
    yaml_path: str | Path | None = None, *, base_dir: str | Path | None = None
) -> Config:
    """Load and validate configuration.

    Args:
        yaml_path: Path to YAML configuration file; defaults only when omitted
        base_dir: Overrides ``paths.base_dir`` after loading

    Returns:
        Loaded and validated Config instance
    """
    global _config
    config = Config.from_yaml(yaml_path) if yaml_path is not None else Config()
    if base_dir is not None:
        config.paths.base_dir = Path(base_dir).resolve()
    config.validate_config()
    _config = config
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
