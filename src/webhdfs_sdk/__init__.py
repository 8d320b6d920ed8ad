"""
WebHDFS Python SDK
Typed client for the HDFS-over-HTTP REST interface
"""

from .version import __version__
from .config import (
    Configuration,
    StatusPolicy,
    WEBHDFS_PREFIX,
    derive_base_url,
)
from .operations import Operation
from .url_builder import build_request_url, join_path
from .envelope import (
    RemoteEnvelope,
    RemoteException,
    decode,
    decode_envelope,
)
from .session import WebHdfsSession
from .dispatcher import RequestDescriptor, call, execute
from .client import WebHdfsClient, create_client
from .exceptions import (
    WebHdfsError,
    ValidationError,
    ConfigurationError,
    TransportError,
    ProtocolError,
    AuthenticationError,
    DecodeError,
    RemoteServiceError,
)


# Public API exports
__all__ = [
    '__version__',
    # Configuration
    'Configuration',
    'StatusPolicy',
    'WEBHDFS_PREFIX',
    'derive_base_url',
    # Operations and URLs
    'Operation',
    'build_request_url',
    'join_path',
    # Response decoding
    'RemoteEnvelope',
    'RemoteException',
    'decode',
    'decode_envelope',
    # Transport and dispatch
    'WebHdfsSession',
    'RequestDescriptor',
    'call',
    'execute',
    'WebHdfsClient',
    'create_client',
    # Exceptions
    'WebHdfsError',
    'ValidationError',
    'ConfigurationError',
    'TransportError',
    'ProtocolError',
    'AuthenticationError',
    'DecodeError',
    'RemoteServiceError',
]
