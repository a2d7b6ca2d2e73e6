"""Server configuration with defaults filled in on demand."""

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from grimoire import uid
from grimoire.stdout_logger import StdOutLogger

DEFAULT_APP_NAME_LEN = 16
DEFAULT_CERT_PATH = "cert/cert.pem"
DEFAULT_KEY_PATH = "cert/private.key"

TLS_PORT = ":443"
PROD_PORT = ":80"
DEFAULT_PORT = ":8080"


@dataclass
class TLSConfig:
    """Paths of the certificate and private key files."""

    cert_path: str = ""
    key_path: str = ""


@dataclass
class ServerConfig:
    """Settings of a server; unset values are resolved to defaults."""

    app_name: str = ""
    addr: str = ""
    handler: Optional[Callable[..., Any]] = None
    logger: Any = None
    tls_config: Optional[TLSConfig] = None

    def resolve_tls(self) -> TLSConfig:
        """Return the TLS settings, or the default certificate paths."""
        if self.tls_config is None:
            return TLSConfig(DEFAULT_CERT_PATH, DEFAULT_KEY_PATH)
        return self.tls_config

    def resolve_logger(self) -> Any:
        """Return the logger, or a standard-output logger named after the app."""
        if self.logger is None:
            return StdOutLogger(self.app_name)
        return self.logger

    def resolve_app_name(self) -> str:
        """Return the app name, generating and keeping a random one if unset."""
        if not self.app_name:
            self.app_name = uid.new_uid(DEFAULT_APP_NAME_LEN)
        return self.app_name

    def resolve_addr(self) -> str:
        """Return the listen address: port 443 with TLS, 80 when ENV is PROD, else 8080."""
        if self.tls_config is not None:
            return self.addr + TLS_PORT
        if os.environ.get("ENV") == "PROD":
            return self.addr + PROD_PORT
        return self.addr + DEFAULT_PORT