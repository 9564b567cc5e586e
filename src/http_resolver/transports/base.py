# src/http_resolver/transports/base.py

from abc import ABC, abstractmethod
from typing import Callable

from ..core.config import RequestDescriptor
from ..core.envelope import ResponseEnvelope

CompletionHandler = Callable[[ResponseEnvelope], None]


class Transport(ABC):
    """
    Базовый класс транспорта.

    Транспорт выполняет одну попытку и вызывает ``on_complete`` ровно один
    раз - и при полученном ответе (любой статус), и при ошибке сети.
    Исключения транспорта не выходят наружу: они превращаются в
    ResponseEnvelope с заполненным ``error``.
    """

    @abstractmethod
    def send(self, descriptor: RequestDescriptor, on_complete: CompletionHandler) -> None:
        """Выполнить попытку и передать результат в on_complete"""
        pass

    def close(self) -> None:
        """Освободить ресурсы (сессии, соединения)"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
