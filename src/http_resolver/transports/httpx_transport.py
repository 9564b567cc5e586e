"""Transport на базе httpx."""

import time
from typing import Optional

import httpx

from ..core.config import RequestDescriptor
from ..core.envelope import ResponseEnvelope
from ..core.exceptions import transport_error_from_exception
from .base import CompletionHandler, Transport


class HttpxTransport(Transport):
    """
    Синхронный транспорт на httpx.Client.

    Args:
        client: Готовый httpx.Client (по умолчанию создаётся свой)
        verify_ssl: Проверять SSL сертификаты (если client не передан)

    Example:
        >>> transport = HttpxTransport(httpx.Client(http2=True))
    """

    def __init__(self, client: Optional[httpx.Client] = None, verify_ssl: bool = True):
        self._owns_client = client is None
        self._client = client or httpx.Client(verify=verify_ssl)

    def perform(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        """Выполнить одну попытку."""
        start = time.monotonic()
        try:
            response = self._client.request(
                descriptor.method,
                descriptor.url,
                headers=dict(descriptor.headers),
                params=dict(descriptor.params),
                content=descriptor.data,
                timeout=descriptor.timeout,
            )
        except httpx.HTTPError as e:
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
        if self._owns_client:
            self._client.close()
