"""
Response resolution pipeline.

One ResponseEnvelope per attempt goes in; exactly one terminal delivery
(or a restart of the logical request) comes out.
"""

import itertools
import logging
from functools import partial
from typing import Any, Callable, Optional

from .callbacks import CallbackSink, ExtendedResponse
from .config import RequestDescriptor, ResolverContext
from .decoder import DecodeFailure, ResultDecoder
from .envelope import ResponseEnvelope
from .logging import ResolverLogger, set_correlation_id, clear_correlation_id
from .request import LogicalRequest
from .scheduler import Scheduler, ThreadingScheduler
from .status import StatusCode, StatusKind, classify
from .utils import GENERIC_ERROR_MESSAGE, extract_error_message, sanitize_url
from ..utils.sanitizer import mask_sensitive_data

logger = logging.getLogger(__name__)

NOT_AUTHORIZED_MESSAGE = "Not authorized"
CONNECTION_TIMEOUT_MESSAGE = "Connection timeout"

_instance_ids = itertools.count(1)


class ResponseResolver:
    """
    Оркестратор обработки ответа.

    Для каждой попытки: проверка отмены → классификация → retry или
    success / unauthorized / error ветка → декодирование → доставка через
    scheduler.

    Args:
        transport: Транспорт, выполняющий попытки
        scheduler: Планировщик доставки успеха (по умолчанию ThreadingScheduler)
        context: Процессные хуки и настройки (ResolverContext)

    Example:
        >>> with ResponseResolver(RequestsTransport()) as resolver:
        ...     resolver.submit(
        ...         RequestDescriptor.create("https://api.example.com/count", result_type=int),
        ...         CallbackSink(on_success=print)
        ...     )
    """

    def __init__(
        self,
        transport,
        scheduler: Optional[Scheduler] = None,
        context: Optional[ResolverContext] = None
    ):
        self.transport = transport
        self.scheduler = scheduler or ThreadingScheduler()
        self.context = context or ResolverContext()
        self.decoder = ResultDecoder(self.context.date_strategy)

        self._logger: Optional[ResolverLogger] = None
        if self.context.logging is not None:
            # Own child logger: closing one resolver leaves the others untouched
            name = f"http_resolver.resolver.{next(_instance_ids)}"
            self._logger = ResolverLogger(self.context.logging, name=name)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # ENTRY POINTS
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def submit(self, descriptor: RequestDescriptor, sink: Optional[CallbackSink] = None) -> LogicalRequest:
        """
        Создать логический запрос и выполнить первую попытку.

        Returns:
            LogicalRequest (можно отменить через cancel())
        """
        request = LogicalRequest(descriptor, sink)
        self.start(request)
        return request

    def start(self, request: LogicalRequest) -> None:
        """Отправить попытку; транспорт вернёт конверт в resolve()."""
        self.transport.send(request.descriptor, partial(self.resolve, request))

    def resolve(self, request: LogicalRequest, envelope: ResponseEnvelope) -> None:
        """
        Обработать результат одной попытки.

        Args:
            request: Логический запрос
            envelope: Результат попытки от транспорта
        """
        if request.cancelled:
            self._log(logging.DEBUG, "Request cancelled, response dropped", request_id=request.request_id)
            return

        set_correlation_id(request.request_id)
        try:
            if envelope.received:
                self._resolve_received(request, envelope)
            else:
                self._resolve_transport_error(request, envelope)
        finally:
            clear_correlation_id()

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # RECEIVED PATH
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _resolve_received(self, request: LogicalRequest, envelope: ResponseEnvelope) -> None:
        descriptor = request.descriptor
        status = classify(envelope.status, envelope.error.code if envelope.error else None)

        self._log(
            logging.INFO, "Response received",
            method=descriptor.method,
            url=descriptor.url,
            status=envelope.status,
            classification=str(status),
            attempt=request.attempt,
            elapsed_ms=round(envelope.elapsed * 1000, 2),
        )

        # Retry имеет приоритет над всеми ветками, включая успех
        if request.retry_policy.should_retry(request.retry_state, status):
            self._restart(request, status)
            return

        if envelope.status in descriptor.success_codes:
            self._resolve_success(request, envelope, status)
        elif status.kind is StatusKind.UNAUTHORIZED:
            self._resolve_unauthorized(request, envelope)
        else:
            self._fail(request, status, extract_error_message(envelope.body), envelope.body)

    def _resolve_success(self, request: LogicalRequest, envelope: ResponseEnvelope, status: StatusCode) -> None:
        descriptor = request.descriptor
        outcome = self.decoder.decode(descriptor.result_shape, envelope.body, descriptor.date_strategy)

        if isinstance(outcome, DecodeFailure):
            self._fail(request, StatusCode.UNDECODABLE, GENERIC_ERROR_MESSAGE, envelope.body)
            return

        extended = ExtendedResponse(
            headers=envelope.headers,
            status=status,
            body=envelope.body,
            value=outcome.value,
        )
        observer = None
        if self.context.success_observer is not None:
            observer = partial(self.context.success_observer, descriptor.method, descriptor.url)

        sinks = request.sink.success_sinks(outcome.value, extended, observer)
        delay = max(0.0, descriptor.additional_timeout - envelope.elapsed)

        def deliver():
            for sink in sinks:
                self._invoke(sink, request)

        if delay > 0:
            self._log(logging.DEBUG, "Delivery delayed", request_id=request.request_id, delay_s=round(delay, 3))
        self.scheduler.schedule(delay, deliver)

    def _resolve_unauthorized(self, request: LogicalRequest, envelope: ResponseEnvelope) -> None:
        if self.context.unauthorized_hook is not None:
            self._invoke(self.context.unauthorized_hook, request)

        if request.descriptor.on_unauthorized is not None:
            self._log_failure(request, StatusCode.UNAUTHORIZED, NOT_AUTHORIZED_MESSAGE)
            self._invoke(request.descriptor.on_unauthorized, request)
        else:
            self._fail(request, StatusCode.UNAUTHORIZED, NOT_AUTHORIZED_MESSAGE, envelope.body)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # TRANSPORT ERROR PATH
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _resolve_transport_error(self, request: LogicalRequest, envelope: ResponseEnvelope) -> None:
        error = envelope.error
        descriptor = request.descriptor

        if error is None or not error.is_timeout:
            self._log(
                logging.ERROR, "Transport error",
                method=descriptor.method,
                url=descriptor.url,
                error_code=error.code.value if error else None,
                error_message=error.message if error else None,
                attempt=request.attempt,
            )
            self._fail(request, StatusCode.CANNOT_CONNECT_TO_HOST, GENERIC_ERROR_MESSAGE, None)
            return

        status = classify(None, error.code)
        self._log(
            logging.WARNING, "Request timed out",
            method=descriptor.method,
            url=descriptor.url,
            classification=str(status),
            attempt=request.attempt,
            elapsed_ms=round(envelope.elapsed * 1000, 2),
        )

        if descriptor.on_timeout is not None:
            self._invoke(descriptor.on_timeout, request)
        else:
            self._fail(request, status, CONNECTION_TIMEOUT_MESSAGE, None)

        # Оценивается даже после уведомления о таймауте
        if request.retry_policy.should_retry_timeout(request.retry_state, status):
            self._restart(request, status)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # DELIVERY
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _restart(self, request: LogicalRequest, status: StatusCode) -> None:
        request.retry_state.increment()
        self._log(
            logging.INFO, "Retrying request",
            method=request.descriptor.method,
            url=request.descriptor.url,
            classification=str(status),
            attempt=request.attempt,
            max_attempts=request.descriptor.retry.max_attempts,
        )
        self.start(request)

    def _fail(self, request: LogicalRequest, status: StatusCode, message: str, body: Optional[bytes]) -> None:
        self._log_failure(request, status, message)
        if request.sink.on_error is not None:
            self._invoke(partial(request.sink.on_error, status, message, body), request)

    def _log_failure(self, request: LogicalRequest, status: StatusCode, message: str) -> None:
        self._log(
            logging.ERROR, "Request failed",
            method=request.descriptor.method,
            url=request.descriptor.url,
            classification=str(status),
            error_message=message,
            attempt=request.attempt,
        )

    def _invoke(self, callback: Callable[[], Any], request: LogicalRequest) -> None:
        """Вызвать callback; исключение логируется и не прерывает доставку."""
        try:
            callback()
        except Exception:
            logger.exception("Callback raised for request %s", request.request_id)

    def _log(self, level: int, message: str, **fields: Any) -> None:
        """Best-effort structured log: ошибки логирования подавляются."""
        try:
            if 'url' in fields:
                fields['url'] = sanitize_url(fields['url'])
            if self._logger is not None:
                self._logger.log(level, message, **fields)
            else:
                logger.log(level, message, extra=mask_sensitive_data(fields))
        except Exception:
            pass

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # LIFECYCLE
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def close(self) -> None:
        """Отменить отложенные доставки и закрыть транспорт."""
        self.scheduler.close()
        self.transport.close()
        if self._logger is not None:
            self._logger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
