from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app import __version__
from app.core.paths import ROOT_PATH

from .configs import APIConfiguration, LogConfiguration, MetricsConfiguration


# noinspection PyArgumentList
class Configuration(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    app_name: str = Field('Hello Metrics', description='Application name')
    app_description: str = Field(
        'Hello routes instrumented with request metrics',
        description='Application description',
    )
    app_version: str = __version__
    app_environment: Literal['test', 'local', 'dev', 'qa', 'prod'] = Field(
        'local', description='Application environment', validation_alias='ENVIRONMENT'
    )

    api: APIConfiguration = Field(default_factory=APIConfiguration)
    log: LogConfiguration = Field(default_factory=LogConfiguration)
    metrics: MetricsConfiguration = Field(default_factory=MetricsConfiguration)

    @property
    def app_debug(self) -> bool:
        return self.app_environment in ['test', 'local', 'dev']


# noinspection PyArgumentList
@lru_cache
def get_config() -> Configuration:
    """
    Get cached application settings.
    """
    return Configuration()
