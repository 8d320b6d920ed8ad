"""
Request URL construction

Combines a Configuration, a remote path and the query parameters of one
operation into an absolute request URL. Pure functions only: no network
access and no mutation of the configuration.
"""

from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from .config import Configuration, derive_base_url


def _format_param(value: Any) -> str:
    # WebHDFS expects lower-case booleans
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def join_path(base: str, path: Optional[str]) -> str:
    """Join ``path`` onto ``base`` with exactly one ``/`` between them."""
    if not path:
        return base
    return base.rstrip('/') + '/' + path.lstrip('/')


def build_request_url(
    config: Configuration,
    path: Optional[str],
    params: Optional[Mapping[str, Any]] = None
) -> str:
    """
    Build the canonical URL for a remote request.
    
    Args:
        config: Connection configuration
        path: Remote filesystem path, with or without a leading slash
        params: Query parameters, normally including ``op``
        
    Returns:
        str: Absolute request URL
        
    Raises:
        ConfigurationError: If the namenode address is not set
    """
    scheme, netloc, base_path, base_query, _ = urlsplit(derive_base_url(config))
    
    url_path = join_path(base_path, quote(path, safe='/') if path else path)
    
    # user.name from the base URL stays alongside the merged parameters
    query = parse_qsl(base_query, keep_blank_values=True)
    if params:
        query.extend(
            (key, _format_param(value))
            for key, value in params.items()
            if value is not None
        )
    
    return urlunsplit((scheme, netloc, url_path, urlencode(query), ''))
