"""
HTTP transport and authenticated session for WebHDFS

This module owns the long-lived requests.Session used by every call, applies
the configured timeouts and TLS settings, and optionally keeps a cookie based
session alive through a periodic re-authentication in a background thread.
"""

import getpass
import logging
import threading
from typing import Callable, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.cookies import get_cookie_header

from .config import Configuration, derive_base_url
from .exceptions import AuthenticationError, TransportError, WebHdfsError
from .operations import Operation
from .url_builder import build_request_url
from .version import __version__

logger = logging.getLogger(__name__)


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


class WebHdfsSession:
    """
    Transport shared by all requests to one namenode.
    
    When ``enable_auth`` is set the constructor performs the authentication
    handshake and starts a daemon thread that repeats it every
    ``refresh_interval`` seconds until :meth:`close` is called.
    
    The refresh thread and caller threads share one requests.Session, which
    requests does not document as thread-safe. Only urllib3's connection
    pool and the cookie jar's internal lock are relied on; the session's
    own attributes (headers, adapters, verify) are set once in the
    constructor and never changed afterwards.
    """
    
    def __init__(
        self,
        config: Configuration,
        *,
        http: Optional[requests.Session] = None,
        user_lookup: Callable[[], str] = getpass.getuser
    ):
        """
        Initialize the session.
        
        Args:
            config: Connection configuration
            http: Optional pre-built requests.Session to configure and use
            user_lookup: Default user lookup, consulted when no user is set
            
        Raises:
            ConfigurationError: If the namenode address is not set
            AuthenticationError: If auth mode is on and the handshake fails
            TransportError: If auth mode is on and the namenode is unreachable
        """
        self.config = config.with_default_user(user_lookup)
        self.base_url = derive_base_url(self.config)
        self.http = self._configure(http or requests.Session())
        
        self._stop = threading.Event()
        self._refresher: Optional[threading.Thread] = None
        
        if self.config.enable_auth:
            try:
                self.authenticate()
            except WebHdfsError:
                self.http.close()
                raise
            self._start_refresher()
        
        logger.info(f"Initialized WebHDFS session for namenode: {self.config.addr}")
    
    def __enter__(self) -> "WebHdfsSession":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
    
    def _configure(self, http: requests.Session) -> requests.Session:
        """Apply pool size, TLS and header settings to the HTTP session."""
        adapter = HTTPAdapter(
            pool_connections=1,
            pool_maxsize=max(self.config.max_idle_conns_per_host, 1),
        )
        http.mount("http://", adapter)
        http.mount("https://", adapter)
        
        http.verify = not self.config.tls_skip_verify
        
        headers = {
            'Accept': 'application/json',
            'User-Agent': f'WebHDFS-Python-SDK/{__version__}',
        }
        if self.config.disable_keep_alives:
            headers['Connection'] = 'close'
        if self.config.disable_compression:
            headers['Accept-Encoding'] = 'identity'
        http.headers.update(headers)
        
        return http
    
    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        """
        Send one request with the configured timeouts.
        
        Raises:
            TransportError: On DNS, connect, timeout, TLS or read failures
        """
        kwargs.setdefault('timeout', self.config.timeout)
        
        try:
            logger.debug(f"Making {method} request to {url}")
            return self.http.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timeout: {e}", cause=e) from e
        except requests.exceptions.SSLError as e:
            raise TransportError(f"TLS error: {e}", cause=e) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", cause=e) from e
    
    def has_session_cookie(self) -> bool:
        """Check whether the cookie jar holds the session cookie for the base URL."""
        target = requests.Request('GET', self.base_url).prepare()
        header = get_cookie_header(self.http.cookies, target)
        if not header:
            return False
        
        names = (part.split('=', 1)[0].strip() for part in header.split(';'))
        return self.config.session_cookie_name in names
    
    def authenticate(self) -> None:
        """
        Run the authentication handshake.
        
        Issues a LISTSTATUS on the base path with basic credentials and
        requires the namenode to establish a cookie session.
        
        Raises:
            AuthenticationError: On a non-2xx status or a missing session cookie
            TransportError: If the namenode is unreachable
        """
        url = build_request_url(self.config, None, {'op': Operation.LISTSTATUS})
        response = self.request(
            Operation.LISTSTATUS.method,
            url,
            auth=(self.config.user, self.config.password)
        )
        
        if not is_success_status(response.status_code):
            raise AuthenticationError(
                f"Authentication failed: ({response.status_code}) {response.reason}: {response.text}",
                status_code=response.status_code,
                body=response.text
            )
        
        # A 2xx without a session cookie means no session was established
        if not self.has_session_cookie():
            raise AuthenticationError(
                f"Authentication failed: no {self.config.session_cookie_name} cookie "
                f"issued for {self.config.addr}",
                status_code=response.status_code,
                body=response.text
            )
        
        logger.debug(f"Authenticated against namenode: {self.config.addr}")
    
    def refresh(self) -> bool:
        """
        Run one refresh cycle.
        
        Returns:
            bool: True if the handshake succeeded; failures are logged
        """
        try:
            self.authenticate()
        except WebHdfsError as e:
            logger.warning(
                f"Session refresh failed, retrying in {self.config.refresh_interval}s: {e}"
            )
            return False
        return True
    
    def _refresh_loop(self) -> None:
        while not self._stop.wait(self.config.refresh_interval):
            self.refresh()
        logger.debug("Session refresh stopped")
    
    def _start_refresher(self) -> None:
        self._refresher = threading.Thread(
            target=self._refresh_loop,
            name=f"webhdfs-refresh-{self.config.addr}",
            daemon=True
        )
        self._refresher.start()
    
    @property
    def refreshing(self) -> bool:
        return self._refresher is not None and self._refresher.is_alive()
    
    def close(self) -> None:
        """Stop the refresh thread and close the HTTP session."""
        self._stop.set()
        refresher, self._refresher = self._refresher, None
        if refresher is not None and refresher is not threading.current_thread():
            refresher.join()
        
        self.http.close()
        logger.debug("HTTP session closed")
