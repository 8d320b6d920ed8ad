"""
Shared fixtures for the WebHDFS SDK tests
"""

from http import HTTPStatus
from typing import Optional, Union

import pytest
import requests


def build_response(
    status_code: int = 200,
    body: Union[bytes, str] = b"",
    reason: Optional[str] = None,
    url: str = "http://namenode.example.com:9870/webhdfs/v1"
) -> requests.Response:
    """Build a fully read requests.Response without any network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body.encode('utf-8') if isinstance(body, str) else body
    response._content_consumed = True
    response.encoding = 'utf-8'
    response.reason = reason if reason is not None else HTTPStatus(status_code).phrase
    response.url = url
    return response


@pytest.fixture
def make_response():
    """Factory fixture for canned responses."""
    return build_response
