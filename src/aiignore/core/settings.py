from typing import List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aiignore.core.constants import DEFAULT_BOUNDARY_MARKER, DEFAULT_IGNORE_FILENAME, ENV_PREFIX


class IgnoreSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=True,
        extra="ignore"
    )

    # --- DISCOVERY ---
    # Checked in this order at every directory level.
    IGNORE_FILENAMES: Union[str, List[str]] = [DEFAULT_IGNORE_FILENAME]
    BOUNDARY_MARKER: str = DEFAULT_BOUNDARY_MARKER
    # True: a path outside any boundary root is ignored outright instead of
    # falling back to its own directory's ignore file(s).
    IGNORE_OUTSIDE_BOUNDARY: bool = False

    # --- DIAGNOSTICS ---
    QUIET: bool = False
    DEBUG_LOG: bool = False
    WARN_IGNORED: bool = False
    WARN_NOT_IGNORED: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @field_validator("IGNORE_FILENAMES", mode="before")
    @classmethod
    def _coerce_filenames(cls, value):
        if isinstance(value, str):
            value = value.split(",")
        names = [str(v).strip() for v in (value or []) if str(v).strip()]
        if not names:
            raise ValueError("IGNORE_FILENAMES must name at least one file")
        for name in names:
            if "/" in name or "\\" in name:
                raise ValueError(f"ignore filename must not contain a separator: {name!r}")
        return list(dict.fromkeys(names))

    @field_validator("BOUNDARY_MARKER")
    @classmethod
    def _check_marker(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("BOUNDARY_MARKER must not be empty")
        return value

    @property
    def ignore_filenames(self) -> List[str]:
        names = self.IGNORE_FILENAMES
        return [names] if isinstance(names, str) else list(names)


settings = IgnoreSettings()
