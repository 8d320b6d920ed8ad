"""
Request dispatch for WebHDFS operations

Builds the request URL, sends the request through a WebHdfsSession and turns
the response into a decoded payload or a typed error.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .config import StatusPolicy
from .envelope import decode_envelope
from .exceptions import DecodeError, ProtocolError
from .operations import Operation
from .session import WebHdfsSession, is_success_status
from .url_builder import build_request_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """One WebHDFS call: method, target path, operation and extra parameters."""
    method: str
    path: Optional[str]
    operation: Operation
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None
    
    def __post_init__(self):
        object.__setattr__(self, 'operation', Operation.parse(self.operation))
        object.__setattr__(self, 'method', self.method.upper())
    
    @classmethod
    def for_operation(
        cls,
        operation: Union[Operation, str],
        path: Optional[str],
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        method: Optional[str] = None
    ) -> "RequestDescriptor":
        """Create a descriptor using the operation's default HTTP method."""
        operation = Operation.parse(operation)
        return cls(
            method=method or operation.method,
            path=path,
            operation=operation,
            params=dict(params or {}),
            body=body,
        )
    
    def query(self) -> Dict[str, Any]:
        """Query parameters including the ``op`` code."""
        query = dict(self.params)
        query['op'] = self.operation
        return query


def _body_kwargs(body: Any) -> Dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, (dict, list)):
        return {'json': body}
    return {'data': body}


def _handle_response(response: requests.Response, policy: StatusPolicy) -> Dict[str, Any]:
    success = is_success_status(response.status_code)
    
    if policy is StatusPolicy.STRICT and not success:
        raise ProtocolError(
            response.status_code,
            response.reason or "",
            details={'url': response.url}
        )
    
    try:
        envelope = decode_envelope(response.content)
    except DecodeError as e:
        if success:
            raise
        # Error pages are often HTML; report the status instead
        raise ProtocolError(
            response.status_code,
            response.reason or "",
            details={'url': response.url, 'body': e.body}
        ) from e
    
    envelope.raise_for_remote()
    
    if not success:
        raise ProtocolError(
            response.status_code,
            response.reason or "",
            details={'url': response.url}
        )
    
    return envelope.payload


def execute(session: WebHdfsSession, descriptor: RequestDescriptor) -> Dict[str, Any]:
    """
    Dispatch one request and decode its response.
    
    Args:
        session: Session owning the HTTP client and configuration
        descriptor: Request to send
        
    Returns:
        dict: Decoded success payload (empty for bodiless responses)
        
    Raises:
        ConfigurationError: If the namenode address is not set
        TransportError: On network failures
        ProtocolError: On a non-2xx status not explained by a remote exception
        DecodeError: If a successful response body is malformed
        RemoteServiceError: If the namenode reports a RemoteException
    """
    url = build_request_url(session.config, descriptor.path, descriptor.query())
    
    response = session.request(descriptor.method, url, **_body_kwargs(descriptor.body))
    try:
        logger.debug(f"{descriptor.operation.value} {descriptor.path} -> HTTP {response.status_code}")
        return _handle_response(response, session.config.status_policy)
    finally:
        response.close()


def call(
    session: WebHdfsSession,
    method: str,
    path: Optional[str],
    operation: Union[Operation, str],
    params: Optional[Mapping[str, Any]] = None,
    body: Any = None
) -> Dict[str, Any]:
    """Build a RequestDescriptor from the arguments and execute it."""
    descriptor = RequestDescriptor(
        method=method,
        path=path,
        operation=operation,
        params=dict(params or {}),
        body=body,
    )
    return execute(session, descriptor)
