"""
Transport на базе requests.

Каждый поток получает собственную requests.Session: логические запросы
могут резолвиться параллельно из разных потоков.
"""

import threading
import time
import weakref
from typing import Callable, Optional, Set

import requests
from requests.adapters import HTTPAdapter

from ..core.config import RequestDescriptor
from ..core.envelope import ResponseEnvelope
from ..core.exceptions import transport_error_from_exception
from .base import CompletionHandler, Transport


class ThreadLocalSessions:
    """
    Thread-local requests.Session instances.

    Sessions are created lazily on first use per thread and tracked through
    weak references so ``close_all()`` can close them from any thread.
    """

    def __init__(self, session_factory: Callable[[], requests.Session]):
        self._session_factory = session_factory
        self._local = threading.local()
        self._all_sessions: Set[weakref.ref] = set()
        self._lock = threading.Lock()

    def get(self) -> requests.Session:
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._lock:
                self._all_sessions.add(weakref.ref(session, self._discard))
        return session

    def _discard(self, ref: weakref.ref):
        with self._lock:
            self._all_sessions.discard(ref)

    def close_all(self):
        """Close sessions of all threads. Safe to call multiple times."""
        self._local.session = None

        with self._lock:
            refs = list(self._all_sessions)
            self._all_sessions.clear()

        for ref in refs:
            session = ref()
            if session is not None:
                session.close()

    @property
    def active_count(self) -> int:
        with self._lock:
            return sum(1 for ref in self._all_sessions if ref() is not None)


class RequestsTransport(Transport):
    """
    Синхронный транспорт на requests.

    Args:
        verify_ssl: Проверять SSL сертификаты
        pool_maxsize: Максимум соединений в пуле на хост
        session_factory: Своя фабрика сессий (например, для прокси/куки)

    Example:
        >>> with RequestsTransport() as transport:
        ...     transport.send(descriptor, on_complete=print)
    """

    def __init__(
        self,
        verify_ssl: bool = True,
        pool_maxsize: int = 10,
        session_factory: Optional[Callable[[], requests.Session]] = None
    ):
        self.verify_ssl = verify_ssl
        self.pool_maxsize = pool_maxsize
        self._sessions = ThreadLocalSessions(session_factory or self._create_session)

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        # Повторы делает ResponseResolver, не urllib3
        adapter = HTTPAdapter(pool_maxsize=self.pool_maxsize, max_retries=0)
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        return session

    def perform(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        """
        Выполнить одну попытку.

        Returns:
            ResponseEnvelope (с error при ошибке транспорта)
        """
        start = time.monotonic()
        try:
            response = self._sessions.get().request(
                method=descriptor.method,
                url=descriptor.url,
                headers=dict(descriptor.headers),
                params=dict(descriptor.params),
                data=descriptor.data,
                timeout=descriptor.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            return ResponseEnvelope.failed(
                transport_error_from_exception(e),
                elapsed=time.monotonic() - start
            )

        return ResponseEnvelope(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
            elapsed=time.monotonic() - start,
        )

    def send(self, descriptor: RequestDescriptor, on_complete: CompletionHandler) -> None:
        on_complete(self.perform(descriptor))

    def close(self) -> None:
        self._sessions.close_all()
