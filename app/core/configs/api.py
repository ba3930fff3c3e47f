import re
from ipaddress import AddressValueError, IPv4Address, IPv6Address
from typing import ClassVar

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.paths import ROOT_PATH


# noinspection PyNestedDecorators
class APIConfiguration(BaseSettings):
    """API configuration."""

    _HOSTNAME_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r'^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$'
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=ROOT_PATH / '.env',
        env_file_encoding='utf-8',
        env_prefix='API_',
        extra='ignore',
    )

    host: str = Field(
        default='127.0.0.1', description='API server bind address (IP or hostname)'
    )
    port: int = Field(
        default=8080, ge=1, le=65535, description='API server port number'
    )
    workers: int = Field(
        default=1,
        ge=1,
        description=(
            'Number of server worker processes. Metrics are kept in process '
            'memory, so each worker exposes only its own counters on /metrics; '
            'keep this at 1 unless every worker is scraped separately'
        ),
    )
    timeout: int = Field(
        default=30, ge=1, description='Worker request timeout in seconds'
    )

    @field_validator('host')
    @classmethod
    def validate_host(cls, value: str) -> str:
        return cls._validate_single_host(value)

    @classmethod
    def _validate_single_host(cls, host: str) -> str:
        try:
            IPv4Address(host)
            return host
        except AddressValueError:
            pass

        try:
            IPv6Address(host)
            return host
        except AddressValueError:
            pass

        return cls._validate_hostname(host)

    @classmethod
    def _validate_hostname(cls, hostname: str) -> str:
        if not hostname or len(hostname) > 253:
            msg = f'invalid hostname length: {hostname}'
            raise ValueError(msg)

        labels = hostname.split('.')
        invalid_labels = [
            label for label in labels if not cls._HOSTNAME_PATTERN.match(label)
        ]

        if invalid_labels:
            msg = f'invalid hostname "{hostname}": invalid labels {invalid_labels}'
            raise ValueError(msg)

        return hostname
