from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH


class LogConfiguration(BaseSettings):
    """Logging configuration with Loguru."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='LOG_',
        extra='ignore',
    )

    level: Literal[
        'TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL'
    ] = Field('INFO', description='Minimum log level')

    to_file: bool = Field(False, description='Enable file logging')
    file_path: str = Field('app/static/logs/app.log', description='Log file path')

    @model_validator(mode='after')
    def validate_logging_paths(self) -> 'LogConfiguration':
        if self.to_file and not self.file_path:
            msg = 'file_path must be provided if to_file is true'
            raise ValueError(msg)

        return self
