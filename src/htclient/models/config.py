"""Pydantic configuration models for htclient."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class RequestConfig(BaseModel):
    """
    Configuration for a single HTTP request.

    The URL is not checked here; an invalid URL is rejected when the
    request is translated for dispatch.

    Example:
        config = RequestConfig(
            url="https://api.example.com/items",
            method="GET",
            headers={"Accept": "application/json"},
            timeout_seconds=15,
        )
    """

    url: str = Field(..., description="Target URL")
    method: str = Field("POST", description="HTTP method, sent verbatim")
    headers: Optional[dict[str, str]] = Field(None, description="Header name to value mapping")
    body: Optional[bytes] = Field(None, description="Request payload")
    allow_cellular: bool = Field(True, description="Whether metered network paths may be used")
    timeout_seconds: int = Field(
        0,
        ge=0,
        description="Request timeout in seconds (0 = engine default)",
    )

    model_config = {"extra": "forbid", "frozen": True}


class SessionConfig(BaseModel):
    """
    Configuration for an engine session.

    Example:
        config = SessionConfig(engine="aiohttp", default_timeout=10)
        session = build_session(config)

    YAML format:
        engine: requests
        max_workers: 8
        default_timeout: 30
        user_agent: my-app/1.0
    """

    engine: Literal["requests", "aiohttp"] = Field("requests", description="HTTP engine backend")
    max_workers: int = Field(4, ge=1, description="Worker threads for the requests engine")
    max_connections: int = Field(10, ge=1, description="Connection pool size")
    default_timeout: float = Field(
        60.0,
        gt=0,
        description="Timeout in seconds for requests that do not set their own",
    )
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "SessionConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "SessionConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
