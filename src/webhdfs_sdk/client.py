"""
High-level WebHDFS client

Bundles a Configuration and its WebHdfsSession behind a single object so
callers can issue operations without handling descriptors themselves.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from .config import Configuration, StatusPolicy
from .dispatcher import RequestDescriptor, execute
from .operations import Operation
from .session import WebHdfsSession

logger = logging.getLogger(__name__)


class WebHdfsClient:
    """
    Client for one WebHDFS namenode.
    
    Owns the underlying session; use it as a context manager or call
    :meth:`close` to stop the session refresh and release connections.
    """
    
    def __init__(self, config: Configuration, **session_kwargs):
        """
        Initialize the client.
        
        Args:
            config: Connection configuration
            **session_kwargs: Forwarded to :class:`WebHdfsSession`
        """
        self.session = WebHdfsSession(config, **session_kwargs)
    
    def __enter__(self) -> "WebHdfsClient":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
    
    def __repr__(self) -> str:
        return f"<WebHdfsClient(base_url={self.session.base_url!r})>"
    
    @property
    def config(self) -> Configuration:
        return self.session.config
    
    def execute(
        self,
        operation: Union[Operation, str],
        path: Optional[str] = "/",
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        method: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Execute one operation.
        
        Args:
            operation: Operation code
            path: Remote path
            params: Extra query parameters
            body: Optional request body (dict/list bodies are sent as JSON)
            method: HTTP method override; defaults to the operation's method
            
        Returns:
            dict: Decoded success payload
        """
        descriptor = RequestDescriptor.for_operation(operation, path, params, body, method)
        return execute(self.session, descriptor)
    
    def close(self) -> None:
        self.session.close()


def create_client(
    addr: str,
    user: str = "",
    password: str = "",
    base_path: str = "",
    enable_https: bool = False,
    tls_skip_verify: bool = False,
    enable_auth: bool = False,
    timeout: float = 17.0,
    status_policy: StatusPolicy = StatusPolicy.DECODE_BODY
) -> WebHdfsClient:
    """
    Create a WebHDFS client with default configuration.
    
    Args:
        addr: Namenode address as ``host:port``
        user: User name (defaults to the OS user when auth is off)
        password: Password for the authentication handshake
        base_path: Path prefix added after ``/webhdfs/v1``
        enable_https: Use https instead of http
        tls_skip_verify: Skip TLS certificate verification
        enable_auth: Enable the cookie session handshake and refresh
        timeout: Connection and response header timeout in seconds
        status_policy: Handling of non-2xx responses
        
    Returns:
        WebHdfsClient: Configured client
    """
    config = Configuration(
        addr=addr,
        user=user,
        password=password,
        base_path=base_path,
        enable_https=enable_https,
        tls_skip_verify=tls_skip_verify,
        enable_auth=enable_auth,
        connection_timeout=timeout,
        response_header_timeout=timeout,
        status_policy=status_policy,
    )
    return WebHdfsClient(config)
