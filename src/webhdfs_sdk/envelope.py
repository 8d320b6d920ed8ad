"""
Decoding of the WebHDFS JSON response envelope

A response body is either an operation-specific JSON object or a
``{"RemoteException": {...}}`` wrapper describing a server-side failure.
The two outcomes are mutually exclusive.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .exceptions import DecodeError, RemoteServiceError

REMOTE_EXCEPTION_KEY = "RemoteException"

# Bodies are truncated to this many characters in error details
_BODY_EXCERPT = 512


@dataclass(frozen=True)
class RemoteException:
    """Server-side exception reported in the envelope."""
    exception: str
    message: str = ""
    java_class_name: str = ""
    
    def to_error(self) -> RemoteServiceError:
        return RemoteServiceError(
            self.exception,
            self.message,
            self.java_class_name,
            details={'exception': self.exception, 'java_class_name': self.java_class_name}
        )


@dataclass(frozen=True)
class RemoteEnvelope:
    """Decoded response: a success payload or a remote exception, never both."""
    payload: Dict[str, Any] = field(default_factory=dict)
    remote_exception: Optional[RemoteException] = None
    
    @property
    def is_success(self) -> bool:
        return self.remote_exception is None
    
    def raise_for_remote(self) -> None:
        """Raise the remote exception as a RemoteServiceError, if present."""
        if self.remote_exception is not None:
            raise self.remote_exception.to_error()


def _excerpt(text: str) -> str:
    return text if len(text) <= _BODY_EXCERPT else text[:_BODY_EXCERPT] + "..."


def _parse_remote_exception(raw: Any, text: str) -> Optional[RemoteException]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DecodeError("RemoteException is not a JSON object", body=_excerpt(text))
    
    exception = raw.get('exception') or ""
    if not exception:
        return None
    
    return RemoteException(
        exception=str(exception),
        message=str(raw.get('message') or ""),
        java_class_name=str(raw.get('javaClassName') or ""),
    )


def decode_envelope(data: Union[bytes, str, None]) -> RemoteEnvelope:
    """
    Decode a raw response body into an envelope.
    
    Args:
        data: Response body; empty or None yields an empty success envelope
        
    Returns:
        RemoteEnvelope: Decoded envelope
        
    Raises:
        DecodeError: If the body is not a JSON object
    """
    if not data:
        return RemoteEnvelope()
    
    if isinstance(data, bytes):
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DecodeError(f"Response body is not valid UTF-8: {e}") from e
    else:
        text = data
    
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON response: {e}", body=_excerpt(text)) from e
    except RecursionError as e:
        raise DecodeError("JSON response is nested too deeply", body=_excerpt(text)) from e
    
    if not isinstance(document, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(document).__name__}",
            body=_excerpt(text)
        )
    
    remote_exception = _parse_remote_exception(document.get(REMOTE_EXCEPTION_KEY), text)
    if remote_exception is not None:
        return RemoteEnvelope(remote_exception=remote_exception)
    
    return RemoteEnvelope(payload=document)


def decode(data: Union[bytes, str, None]) -> Dict[str, Any]:
    """
    Decode a response body into its success payload.
    
    Raises:
        DecodeError: If the body is malformed
        RemoteServiceError: If the body carries a remote exception
    """
    envelope = decode_envelope(data)
    envelope.raise_for_remote()
    return envelope.payload
