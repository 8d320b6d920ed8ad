"""
Connection configuration for a WebHDFS namenode

Holds the connection parameters shared by every request and derives the
canonical base URL from them.
"""

import getpass
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional
from urllib.parse import quote, urlencode

from .exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

WEBHDFS_PREFIX = "/webhdfs/v1"


class StatusPolicy(Enum):
    """How the dispatcher treats a non-2xx HTTP status"""
    DECODE_BODY = "decode_body"   # Decode the body first, RemoteException wins over the status
    STRICT = "strict"             # Fail with ProtocolError before reading the body


@dataclass(frozen=True)
class Configuration:
    """Configuration for a WebHDFS namenode connection."""
    addr: str = ""
    base_path: str = ""
    user: str = ""
    password: str = ""
    enable_https: bool = False
    tls_skip_verify: bool = False
    connection_timeout: float = 17.0
    response_header_timeout: float = 17.0
    max_idle_conns_per_host: int = 10
    disable_keep_alives: bool = False
    disable_compression: bool = True
    enable_auth: bool = False
    session_cookie_name: str = "JSESSIONID"
    refresh_interval: float = 60.0
    status_policy: StatusPolicy = StatusPolicy.DECODE_BODY
    retry_policy: Optional[Any] = None
    
    def __post_init__(self):
        """Validate numeric settings."""
        if self.connection_timeout <= 0:
            raise ValidationError("Connection timeout must be positive")
        
        if self.response_header_timeout <= 0:
            raise ValidationError("Response header timeout must be positive")
        
        if self.max_idle_conns_per_host < 0:
            raise ValidationError("Max idle connections per host must be non-negative")
        
        if self.refresh_interval <= 0:
            raise ValidationError("Refresh interval must be positive")
        
        if self.enable_auth and not self.session_cookie_name:
            raise ValidationError("Session cookie name cannot be empty when auth is enabled")
    
    @property
    def scheme(self) -> str:
        return "https" if self.enable_https else "http"
    
    @property
    def timeout(self):
        """
        (connect, read) timeout tuple in the form requests expects.
        
        requests applies the read timeout to every socket read, so
        ``response_header_timeout`` bounds each wait for data while the body
        streams in, not only the wait for the status line and headers.
        """
        return (self.connection_timeout, self.response_header_timeout)
    
    def with_default_user(self, lookup: Callable[[], str] = getpass.getuser) -> "Configuration":
        """
        Fill in an empty user from the given lookup.
        
        Only applies when auth mode is off; with auth mode the credentials
        must be given explicitly.
        
        Args:
            lookup: Callable returning the default user name
            
        Returns:
            Configuration: Copy with ``user`` set, or ``self`` when unchanged
            (also when the lookup fails, e.g. no passwd entry for the uid)
        """
        if self.user or self.enable_auth:
            return self
        
        try:
            default_user = lookup()
        except (KeyError, OSError) as e:
            # Requests then go out without user.name
            logger.warning(f"Could not determine default WebHDFS user: {e}")
            return self
        
        logger.debug(f"Defaulting WebHDFS user to: {default_user}")
        return replace(self, user=default_user)


def derive_base_url(config: Configuration) -> str:
    """
    Derive ``scheme://host:port/webhdfs/v1<base_path>[?user.name=<user>]``.
    
    Raises:
        ConfigurationError: If the namenode address is not set
    """
    if not config.addr:
        raise ConfigurationError("Configuration namenode address not set.")
    
    base_path = config.base_path
    if base_path and not base_path.startswith("/"):
        base_path = "/" + base_path
    
    url = f"{config.scheme}://{config.addr}{WEBHDFS_PREFIX}{quote(base_path, safe='/')}"
    if config.user:
        url += "?" + urlencode({'user.name': config.user})
    
    return url
