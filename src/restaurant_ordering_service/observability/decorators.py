"""OpenTelemetry tracing decorators."""

import functools
import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

F = TypeVar("F", bound=Callable[..., Any])


@contextmanager
def _operation_span(name: str, component: str, func_name: str) -> Iterator[Span]:
    tracer = trace.get_tracer("ordering-svc")
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("ordering.component", component)
        span.set_attribute("function.name", func_name)
        try:
            yield span
        except Exception as e:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            span.record_exception(e)
            raise
        span.set_attribute("success", True)


def traced(span_name: str | None = None, component: str = "service") -> Callable[[F], F]:
    """Wrap a sync or async function in an OpenTelemetry span.

    Domain errors (400/404) are recorded on the span like any other exception
    and then re-raised unchanged.

    Args:
        span_name: Name for the span (defaults to the function's qualified name)
        component: Value of the ``ordering.component`` span attribute

    Returns:
        Decorated function with tracing

    Example:
        @traced("orders.place", component="orders")
        async def place_order(self, payload: OrderCreateRequest) -> OrderReceipt:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__qualname__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _operation_span(name, component, func.__name__):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _operation_span(name, component, func.__name__):
                return func(*args, **kwargs)

        return sync_wrapper  # type: ignore

    return decorator
