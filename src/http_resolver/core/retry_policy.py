"""
Политика повторных попыток.

Включает:
- RetryState - счётчик попыток одного логического запроса
- RetryPolicy - решение о retry по классификации ответа

RetryPolicy только оценивает; счётчик увеличивает вызывающий код
(ResponseResolver) сразу после положительного решения.
"""

from .config import RetryConfig
from .status import StatusCode


class RetryState:
    """
    Счётчик попыток одного логического запроса.

    Никогда не сбрасывается: новый логический запрос получает новый счётчик.
    """

    def __init__(self):
        self._attempts_made = 0

    def increment(self):
        """Увеличить счётчик попыток."""
        self._attempts_made += 1

    @property
    def attempts_made(self) -> int:
        """Сколько повторов уже выполнено."""
        return self._attempts_made

    def __repr__(self) -> str:
        return f"RetryState(attempts_made={self._attempts_made})"


class RetryPolicy:
    """
    Решает, нужно ли перезапустить логический запрос.

    Examples:
        >>> policy = RetryPolicy(RetryConfig(max_attempts=2, retry_on={StatusCode.other(503)}))
        >>> state = RetryState()
        >>> if policy.should_retry(state, StatusCode.from_raw(503)):
        >>>     state.increment()
        >>>     transport.send(...)
    """

    def __init__(self, config: RetryConfig):
        """
        Args:
            config: Конфигурация retry
        """
        self.config = config

    def should_retry(self, state: RetryState, classification: StatusCode) -> bool:
        """
        Решить нужен ли retry для полученного ответа.

        Args:
            state: Состояние попыток логического запроса
            classification: Классификация результата попытки

        Returns:
            True если классификация в retry_on и лимит не исчерпан
        """
        # Проверка лимита попыток
        if state.attempts_made >= self.config.max_attempts:
            return False

        return classification in self.config.retry_on

    def should_retry_timeout(self, state: RetryState, classification: StatusCode) -> bool:
        """
        Решить нужен ли retry после таймаута транспорта.

        Тот же предикат, что и should_retry, но только для
        TIMED_OUT / REQUEST_TIMEOUT.

        Args:
            state: Состояние попыток логического запроса
            classification: Классификация результата попытки

        Returns:
            True если нужен retry
        """
        if not classification.is_timeout:
            return False

        return self.should_retry(state, classification)

