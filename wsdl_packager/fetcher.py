"""
Resource fetching for definition documents and their imports.

Provides a uniform interface for reading document text from either a
remote HTTP(S) endpoint or the local filesystem.
"""

from __future__ import annotations

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import unquote, urljoin, urlparse

import requests
from requests.auth import HTTPBasicAuth

from wsdl_packager.domain.models import Credentials

logger = logging.getLogger(__name__)


def is_url(location: str) -> bool:
    return '://' in location


def resolve_location(location: str, base: str | None) -> str:
    """Resolve a possibly relative location against the location it came from.

    Absolute URLs and absolute paths are returned unchanged; relative ones are
    joined to ``base`` as a URL or as a sibling file path.
    """
    if not base or is_url(location) or os.path.isabs(location):
        return location
    if is_url(base):
        return urljoin(base, location)
    return os.path.normpath(os.path.join(os.path.dirname(base), location))


class ResourceFetcher(ABC):
    """Abstract interface for retrieving document text by location."""

    @abstractmethod
    def fetch(self, location: str) -> str | None:
        """Return the document text, or ``None`` when it cannot be retrieved."""

    def absolute_location(self, location: str) -> str:
        """The location as it will actually be fetched."""
        return location


class DefaultFetcher(ResourceFetcher):
    """Fetches over HTTP(S) with ``requests`` and from local files.

    Locations without a scheme are joined to ``base_url`` when one is
    configured, otherwise they are read as filesystem paths. Each thread gets
    its own ``requests.Session``.

    Args:
        credentials: Attached to every HTTP request when non-empty.
        base_url: Base for scheme-less locations.
        timeout: Per-request timeout in seconds.
        allow_local_files: Read ``file://`` URLs and plain paths; when
            False such locations are treated as unreachable.
    """

    def __init__(self, credentials: Credentials | None = None,
                 base_url: str | None = None, timeout: float = 30.0,
                 allow_local_files: bool = True):
        self._base_url = base_url
        self._timeout = timeout
        self._allow_local_files = allow_local_files
        self._auth = None
        if credentials is not None and not credentials.is_empty:
            self._auth = self._make_auth(credentials)
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """The calling thread's session, created on first use."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            session.auth = self._auth
            self._local.session = session
        return session

    @staticmethod
    def _make_auth(credentials: Credentials) -> HTTPBasicAuth:
        username = credentials.username or ''
        if credentials.domain:
            username = f'{credentials.domain}\\{username}'
        return HTTPBasicAuth(username, credentials.password or '')

    def absolute_location(self, location: str) -> str:
        if self._base_url and not is_url(location):
            return urljoin(self._base_url, location)
        return location

    def fetch(self, location: str) -> str | None:
        if not location:
            return None
        location = self.absolute_location(location)
        is_local = location.startswith('file://') or not is_url(location)
        if is_local and not self._allow_local_files:
            logger.debug('Refusing local location %s', location)
            return None
        if location.startswith('file://'):
            return self._read_file(unquote(urlparse(location).path))
        if is_url(location):
            return self._fetch_url(location)
        return self._read_file(location)

    def _fetch_url(self, url: str) -> str | None:
        try:
            resp = self.session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            logger.debug('Request for %s failed: %s', url, e)
            return None
        if not resp.ok:
            logger.debug('Request for %s returned HTTP %s', url, resp.status_code)
            return None
        if 'charset' not in resp.headers.get('Content-Type', '').lower():
            resp.encoding = 'utf-8'
        return resp.text

    @staticmethod
    def _read_file(path: str) -> str | None:
        file_path = Path(path)
        if not file_path.is_file():
            logger.debug('File not found: %s', path)
            return None
        try:
            return file_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            logger.debug('Could not read %s: %s', path, e)
            return None
