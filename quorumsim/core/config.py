"""quorumsim.core.config

Config surfaces, highest priority first:
1) Command line flags (applied by the CLI; `--seed` arrives as an init overlay)
2) Environment variables (`QUORUMSIM_*`, nested with `__`)
3) `config/default.yaml`
4) Built-in defaults below

Sweep defaults are kept as text so they go through the same parser as flags.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from quorumsim.core.exceptions import ConfigError

# Parsed YAML for the `Config` currently being built by `from_yaml`.
_YAML_DATA: ContextVar[dict[str, Any]] = ContextVar("quorumsim_yaml_data", default={})


class YamlDataSource(PydanticBaseSettingsSource):
    """Settings source over already-parsed YAML; ranked below the environment."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return _YAML_DATA.get().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in _YAML_DATA.get().items() if k in self.settings_cls.model_fields}


class SweepDefaults(BaseModel):
    """Values used when a flag is not given on the command line."""

    nodes: str = "1000"
    malicious: str = "10%"
    min_group_size: str = "10"
    quorum_prop: str = "0.5"
    max_steps: int = 1000
    repetitions: int = 100
    quorum: Literal["simple", "age", "all"] = "simple"
    targetting: Literal["none", "simple", "all"] = "none"

    @field_validator("max_steps", "repetitions")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v


class SimulationConfig(BaseModel):
    seed: int | None = None
    max_configurations: int | None = None
    warn_configurations: int = 10_000

    @field_validator("max_configurations")
    @classmethod
    def limit_must_be_positive(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_configurations must be >= 1")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    sweep: SweepDefaults = Field(default_factory=SweepDefaults)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_prefix": "QUORUMSIM_", "env_nested_delimiter": "__"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, dotenv_settings, YamlDataSource(settings_cls), file_secret_settings)

    @classmethod
    def from_yaml(cls, path: Path, *, overlay: dict[str, Any] | None = None) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must hold a mapping: {path}")

        token = _YAML_DATA.set(raw)
        try:
            return cls(**(overlay or {}))
        except ValidationError as e:
            raise ConfigError(f"Invalid config in {path}: {e}") from e
        finally:
            _YAML_DATA.reset(token)

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        path = root / "config" / "default.yaml"
        if not path.exists():
            try:
                return cls()
            except ValidationError as e:
                raise ConfigError(f"Invalid config from environment: {e}") from e
        return cls.from_yaml(path)
