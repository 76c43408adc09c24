from dataclasses import dataclass

from consulcat.core.parameters import Consistency
from consulcat.datastructures.type_aliases import (
    DatacenterName,
    DurationSeconds,
    HostAddress,
    PortNumber,
    UrlString,
)

DEFAULT_HOST: HostAddress = "127.0.0.1"
DEFAULT_PORT: PortNumber = 8500


@dataclass(slots=True)
class ConsulSettings:
    """Connection settings for a catalog agent."""

    host: HostAddress = DEFAULT_HOST
    port: PortNumber = DEFAULT_PORT
    scheme: str = "http"
    # Sent as ``dc=`` on every request when set
    datacenter: DatacenterName | None = None
    consistency: Consistency = Consistency.DEFAULT
    timeout: DurationSeconds = 10.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.scheme not in ("http", "https"):
            raise ValueError(f"Unsupported scheme: {self.scheme}")
        self.port = int(self.port)
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}")

    @property
    def base_url(self) -> UrlString:
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def from_address(cls, address: str, **overrides: object) -> "ConsulSettings":
        """Build settings from ``host``, ``host:port`` or ``scheme://host:port``."""
        value = address.strip()
        scheme = "http"
        if "://" in value:
            scheme, value = value.split("://", 1)
        value = value.rstrip("/")
        host, sep, port = value.rpartition(":")
        if not sep or "]" in port:
            host, port = value, str(DEFAULT_PORT)
        if not host:
            raise ValueError(f"Invalid address: {address!r}")
        return cls(
            host=host,
            port=int(port),
            scheme=scheme,
            **overrides,  # type: ignore[arg-type]
        )
