import re
from functools import cached_property
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field, field_validator

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Parse a duration string such as "30s", "90m" or "2h45m" into seconds.
    "0" is accepted without a unit.
    """
    text = value
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return sign * total


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "public-content-by-concept-api"
    app_description: str = "A public RESTful API for accessing Content via Concepts in neo4j"
    app_version: str = "0.1.0"
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    env: str = "local"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # Neo4j
    neo_url: str = "bolt://localhost:7687"
    neo_user: str = ""
    neo_password: str = ""
    neo_database: Optional[str] = None
    neo_query_timeout: float = 10.0

    # HTTP caching of GET responses, e.g. "2h45m" -> max-age=9900
    cache_duration: str = "30s"

    @field_validator("cache_duration")
    @classmethod
    def _check_cache_duration(cls, v: str) -> str:
        parse_duration(v)
        return v

    @computed_field
    @cached_property
    def cache_control_header(self) -> str:
        seconds = parse_duration(self.cache_duration)
        return f"max-age={seconds:.0f}, public"

settings = Settings()
