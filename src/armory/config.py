"""Application settings and static lookup tables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ITEM_TYPES: tuple[str, ...] = (
    "Primaries",
    "Secondaries",
    "Launchers",
    "Throwables",
    "Explosives",
    "Muzzles",
    "Pointers",
    "Optics",
    "Bipods",
    "Tools",
    "Terminals",
    "Maps",
    "GPSs",
    "Radios",
    "Compasses",
    "Watches",
    "Facewear",
    "Headgear",
    "Goggles",
    "Binoculars",
    "Magazines",
    "Uniforms",
    "Vests",
    "Backpacks",
)

# Characters with meaning inside document queries; stripped from user input.
BLOCKED_CHARACTERS: frozenset[str] = frozenset({"'", '"', "\\", ";", "{", "}", "$"})

DEFAULT_MODS: tuple[str, ...] = (
    "vanilla",
    "ace",
    "3cb",
    "rhs",
    "niarms",
    "tacvests",
    "tryk",
    "vsm",
    "rksl",
    "acre",
    "projectopfor",
    "immersioncigs",
)


class Settings(BaseSettings):
    """Runtime settings, read from ``ARMORY_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ARMORY_", env_file=".env", env_file_encoding="utf-8"
    )

    store_url: str = Field(
        default="sqlite:///./var/{database}.db",
        description="SQLAlchemy URL template; {database} is replaced by the database name",
    )
    database_name: str = Field(default="arma-api", min_length=1)
    backup_suffix: str = Field(default="-backup", min_length=1)
    data_dir: Path = Field(default=Path("data"), description="Directory holding source JSON files")
    logfile_path: Path | None = Field(default=Path("/tmp/armory.log"))
    log_level: str = Field(default="INFO")
    supported_mods: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_MODS),
        description="Mod identifiers accepted by the query API",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )

    @field_validator("supported_mods", mode="before")
    @classmethod
    def _split_mods(cls, value: object) -> object:
        if isinstance(value, str):
            return [mod.strip() for mod in value.split(",") if mod.strip()]
        return value

    @property
    def backup_database_name(self) -> str:
        return f"{self.database_name}{self.backup_suffix}"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
