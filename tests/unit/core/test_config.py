"""Тесты конфигурации."""

from types import MappingProxyType

import pytest

from http_resolver.core.config import RequestDescriptor, ResolverContext, RetryConfig
from http_resolver.core.dates import DateDecodingStrategy
from http_resolver.core.decoder import NoContent, ResultShape, ShapeKind
from http_resolver.core.status import StatusCode


class TestRetryConfig:
    def test_defaults(self):
        config = RetryConfig()
        assert config.max_attempts == 0
        assert config.retry_on == frozenset()
        assert config.enabled is False

    def test_int_codes_are_classified(self):
        config = RetryConfig(max_attempts=1, retry_on={401, 503})
        assert config.retry_on == {StatusCode.UNAUTHORIZED, StatusCode.other(503)}
        assert config.enabled is True

    def test_negative_attempts(self):
        with pytest.raises(ValueError, match="max_attempts"):
            RetryConfig(max_attempts=-1)

    def test_on_timeout(self):
        config = RetryConfig.on_timeout(2)
        assert config.max_attempts == 2
        assert config.retry_on == {StatusCode.TIMED_OUT, StatusCode.REQUEST_TIMEOUT}

    def test_immutable(self):
        config = RetryConfig()
        with pytest.raises(AttributeError):
            config.max_attempts = 5


class TestRequestDescriptor:
    def test_defaults(self):
        descriptor = RequestDescriptor(url="https://api.example.com/ping")
        assert descriptor.method == "GET"
        assert descriptor.timeout == 15.0
        assert descriptor.additional_timeout == 0.0
        assert descriptor.success_codes == {200}
        assert descriptor.result_shape.kind is ShapeKind.EMPTY
        assert descriptor.date_strategy is None

    def test_normalisation(self):
        descriptor = RequestDescriptor(
            url="https://api.example.com/users",
            method="post",
            result_shape=int,
            headers={"Accept": "application/json"},
        )
        assert descriptor.method == "POST"
        assert descriptor.result_shape == ResultShape.primitive(int)
        assert isinstance(descriptor.headers, MappingProxyType)

    def test_headers_are_frozen(self):
        descriptor = RequestDescriptor(url="https://api.example.com", headers={"A": "1"})
        with pytest.raises(TypeError):
            descriptor.headers["B"] = "2"

    @pytest.mark.parametrize("kwargs,match", [
        ({"url": ""}, "url"),
        ({"timeout": 0}, "timeout"),
        ({"additional_timeout": -1}, "additional_timeout"),
        ({"success_codes": frozenset()}, "success_codes"),
        ({"success_codes": {200, 700}}, "700"),
    ])
    def test_validation(self, kwargs, match):
        params = {"url": "https://api.example.com"}
        params.update(kwargs)
        with pytest.raises(ValueError, match=match):
            RequestDescriptor(**params)

    def test_create(self):
        descriptor = RequestDescriptor.create(
            "https://api.example.com/count",
            result_type=int,
            max_retries=2,
            retry_on=[503, StatusCode.TIMED_OUT],
            success_codes=[200, 201],
            additional_timeout=1.0,
        )
        assert descriptor.retry.max_attempts == 2
        assert descriptor.retry.retry_on == {StatusCode.other(503), StatusCode.TIMED_OUT}
        assert descriptor.success_codes == {200, 201}
        assert descriptor.additional_timeout == 1.0
        assert descriptor.result_shape.target is int

    def test_create_passes_extra_kwargs(self):
        strategy = DateDecodingStrategy.SECONDS_SINCE_1970
        descriptor = RequestDescriptor.create("https://api.example.com", date_strategy=strategy, data=b"{}")
        assert descriptor.date_strategy is strategy
        assert descriptor.data == b"{}"

    def test_with_retries_keeps_retry_set(self):
        original = RequestDescriptor.create("https://api.example.com", max_retries=1, retry_on=[503])
        updated = original.with_retries(4)

        assert updated.retry.max_attempts == 4
        assert updated.retry.retry_on == {StatusCode.other(503)}
        assert original.retry.max_attempts == 1

    def test_with_helpers(self):
        original = RequestDescriptor(url="https://api.example.com")
        assert original.with_additional_timeout(2.0).additional_timeout == 2.0
        assert original.with_success_codes(200, 204).success_codes == {200, 204}
        assert original.with_retries(1, retry_on=[408]).retry.retry_on == {StatusCode.REQUEST_TIMEOUT}

    def test_callbacks_do_not_affect_equality(self):
        a = RequestDescriptor(url="https://api.example.com", on_timeout=lambda: None)
        b = RequestDescriptor(url="https://api.example.com")
        assert a == b

    def test_no_content_marker(self):
        assert RequestDescriptor(url="https://x", result_shape=NoContent).result_shape == ResultShape.empty()


def test_resolver_context_defaults():
    context = ResolverContext()
    assert context.unauthorized_hook is None
    assert context.success_observer is None
    assert context.date_strategy is None
    assert context.logging is None
