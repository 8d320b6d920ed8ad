"""
Exception classes for the WebHDFS Python SDK
"""

from typing import Optional, Dict, Any


class WebHdfsError(Exception):
    """Base exception for all WebHDFS SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ValidationError(WebHdfsError):
    """Exception raised for invalid arguments or configuration values"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class ConfigurationError(WebHdfsError):
    """Exception raised when a required configuration field is missing"""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)


class TransportError(WebHdfsError):
    """Exception raised for DNS, connect, timeout and TLS failures"""
    
    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "TRANSPORT_ERROR", details)
        self.cause = cause


class ProtocolError(WebHdfsError):
    """Exception raised for an HTTP status outside the 2xx range"""
    
    def __init__(self, status_code: int, reason: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Bad status code: ({status_code}) {reason}".rstrip(), "PROTOCOL_ERROR", details)
        self.status_code = status_code
        self.reason = reason


class AuthenticationError(WebHdfsError):
    """Exception raised when the session handshake fails"""
    
    def __init__(self, message: str, status_code: int = 0, body: str = "",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "AUTHENTICATION_ERROR", details)
        self.status_code = status_code
        self.body = body


class DecodeError(WebHdfsError):
    """Exception raised when a response body is not a valid JSON envelope"""
    
    def __init__(self, message: str, body: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DECODE_ERROR", details)
        self.body = body


class RemoteServiceError(WebHdfsError):
    """Exception raised when the namenode answers with a RemoteException"""
    
    def __init__(self, exception: str, message: str = "", java_class_name: str = "",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(f"{exception}: {message}" if message else exception, "REMOTE_EXCEPTION", details)
        self.exception = exception
        self.message = message
        self.java_class_name = java_class_name
