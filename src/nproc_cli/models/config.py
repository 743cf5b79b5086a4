from pathlib import Path
from typing import Annotated, Literal

from pydantic import AfterValidator, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import ENV_PREFIX

LogFilePath = Annotated[Path, AfterValidator(lambda v: v.expanduser())]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class NprocSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="forbid",
        validate_assignment=True,
        env_prefix=ENV_PREFIX,
    )

    log_level: LogLevel = "WARNING"
    """
    Level for diagnostics written to stderr.
    """

    log_file: LogFilePath | None = None
    """
    Optional file that receives a copy of the diagnostics.
    """

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # NPROC_* variables override values read from config files
        return env_settings, init_settings
