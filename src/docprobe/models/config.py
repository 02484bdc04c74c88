"""Pydantic configuration models for docprobe."""

from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://docs.oracle.com"


class NetworkConfig(BaseModel):
    """Configuration for the probe HTTP client."""

    timeout: float = Field(5.0, gt=0, description="Per-probe timeout in seconds")
    method: Literal["GET", "HEAD"] = Field("GET", description="HTTP method used for each probe")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")

    model_config = {"extra": "forbid"}


class OutputConfig(BaseModel):
    """Configuration for the supported/unsupported result files."""

    supported_file: Path = Field(
        Path("supported_languages.txt"),
        description="File receiving one line per supported item",
    )
    unsupported_file: Path = Field(
        Path("unsupported_languages.txt"),
        description="File receiving one line per unsupported item",
    )
    append: bool = Field(
        False,
        description="Append to existing result files instead of truncating them",
    )

    model_config = {"extra": "forbid"}


class ProbeConfig(BaseModel):
    """
    Root configuration model for docprobe.

    Example:
        config = ProbeConfig(
            input_file=Path("languages.txt"),
            max_concurrent=20,
            network=NetworkConfig(timeout=3.0),
        )

    YAML format:
        input_file: languages.txt
        base_url: https://docs.oracle.com
        max_concurrent: 20
        network:
          timeout: 3
        output:
          supported_file: ./out/supported.txt
    """

    input_file: Path = Field(Path("languages.txt"), description="Input list of 'id name' lines")
    base_url: str = Field(DEFAULT_BASE_URL, description="Documentation root probed for each id")
    max_concurrent: int = Field(10, ge=1, description="Maximum probes in flight at once")

    # Nested configuration sections
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v.rstrip("/")

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ProbeConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ProbeConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
