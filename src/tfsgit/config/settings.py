"""Application settings using Pydantic Settings."""

from pathlib import Path
from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_FILE = ".tfsgit.yaml"
KEY_PREFIX = "tfs"


class PrefixedYamlSettingsSource(YamlConfigSettingsSource):
    """YAML source accepting both ``cred`` and ``tfscred`` style keys.

    The prefixed form wins when a file carries both.
    """

    def __init__(self, settings_cls: type[BaseSettings], **kwargs) -> None:
        self._field_names = set(settings_cls.model_fields)
        super().__init__(settings_cls, **kwargs)

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        data = super()._read_file(file_path)
        plain = {}
        prefixed = {}
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            name = key.lower()
            if name.startswith(KEY_PREFIX) and name[len(KEY_PREFIX):] in self._field_names:
                prefixed[name[len(KEY_PREFIX):]] = value
            else:
                plain[name] = value
        return {**plain, **prefixed}


class Settings(BaseSettings):
    """Settings for one mirror run.

    Resolved from, in increasing precedence: the optional ``.tfsgit.yaml``
    file, a ``.env`` file, ``TFS*`` environment variables and keyword
    arguments (the command-line flags). Instances are frozen.
    """

    model_config = SettingsConfigDict(
        env_prefix=KEY_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        yaml_file=CONFIG_FILE,
    )

    # Remote
    cred: str = Field(description="user name and access token")
    repo: str = Field(description="repository url")
    branch: str = "master"

    # Walk
    path: str = Field(description="git path")
    match: str = ""
    depth: int = Field(default=10, ge=0)

    # Output / transport
    quiet: bool = False
    timeout: int = Field(default=5, gt=0)
    verbosity: int = Field(default=0, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _match_searches_root_only(cls, data: Any) -> Any:
        # File search only looks at the root level
        if isinstance(data, dict) and data.get("match"):
            return {**data, "depth": 0}
        return data

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PrefixedYamlSettingsSource(settings_cls),
        )

    @property
    def scope_path(self) -> str:
        """Root path with exactly one leading slash and no trailing slash."""
        path = self.path
        if path.endswith("/"):
            path = path[:-1]
        if path.startswith("/"):
            path = path[1:]
        return "/" + path

    @property
    def masked_cred(self) -> str:
        user, sep, _ = self.cred.partition(":")
        return f"{user}:****" if sep else "****"

    @property
    def log_level(self) -> str:
        if self.verbosity > 0:
            return "DEBUG"
        if self.quiet:
            return "WARNING"
        return "INFO"
