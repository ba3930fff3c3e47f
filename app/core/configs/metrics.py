from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from app.core.paths import ROOT_PATH
from app.domain.common.utils import StringUtils


# noinspection PyNestedDecorators
class MetricsConfiguration(BaseSettings):
    """Request metrics and exposition endpoint configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='METRICS_',
        extra='ignore',
    )

    enabled: bool = Field(True, description='Enable request instrumentation')
    namespace: str = Field(
        'rocket', description='Prefix of the built-in HTTP metric names'
    )
    path: str = Field('/metrics', description='Path of the exposition endpoint')
    excluded_paths: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description='Request paths that are never recorded (comma-separated)',
    )

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        if not StringUtils.is_metric_name(v):
            msg = f'not a valid metric namespace: {v}'
            raise ValueError(msg)
        return v

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith('/') or v.endswith('/'):
            msg = f"metrics path must start with '/' and not end with one: {v}"
            raise ValueError(msg)
        return v

    @field_validator('excluded_paths', mode='before')
    @classmethod
    def split_excluded_paths(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            value = value.split(',')
        return [path.strip() for path in value if path.strip()]
