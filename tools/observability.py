"""Instrumentation for calls that leave the engine: weather lookups, storage, agents."""

from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, ParamSpec, TypeVar

from pydantic import BaseModel, ValidationError

from recommender_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")

SLOW_CALL_MS = 1000.0


def _bound_arguments(signature: inspect.Signature | None, args: tuple, kwargs: dict) -> Dict[str, Any]:
    """Map positional and keyword arguments onto parameter names, dropping ``self``."""

    if signature is None:
        return dict(kwargs)
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return dict(kwargs)
    return {name: value for name, value in bound.arguments.items() if name not in {"self", "cls"}}


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_tool(
    tool_name: str,
    input_model: type[BaseModel] | None = None,
    on_validation_error: Callable[[ValidationError], R] | None = None,
    kind: str = "tool",
    slow_call_ms: float = SLOW_CALL_MS,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Wrap a collaborator call with input validation and structured timing events.

    When ``input_model`` is given, the call's arguments (positional ones
    included) are validated and the normalised values are passed on as
    keywords. Events are named ``<kind>_call_started``, ``<kind>_call_completed``
    and ``<kind>_call_failed``; completed calls slower than ``slow_call_ms`` are
    logged at WARNING.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        try:
            signature: inspect.Signature | None = inspect.signature(func)
        except (TypeError, ValueError):
            signature = None

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            call_args: tuple = args
            call_kwargs: dict = kwargs
            arguments = _bound_arguments(signature, args, kwargs)

            if input_model is not None:
                try:
                    validated = input_model.model_validate(arguments)
                except ValidationError as exc:
                    log_event(
                        LOGGER,
                        logging.WARNING,
                        f"{kind}_validation_failed",
                        tool=tool_name,
                        correlation_id=correlation_id,
                        errors=exc.errors(include_url=False),
                    )
                    if on_validation_error:
                        return on_validation_error(exc)
                    raise
                call_args = ()
                call_kwargs = validated.model_dump()
                arguments = call_kwargs

            log_event(
                LOGGER,
                logging.INFO,
                f"{kind}_call_started",
                tool=tool_name,
                correlation_id=correlation_id,
                arguments=arguments,
            )
            start = time.perf_counter()
            try:
                result = func(*call_args, **call_kwargs)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    f"{kind}_call_failed",
                    tool=tool_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    exc_info=True,
                )
                raise
            duration_ms = _elapsed_ms(start)
            log_event(
                LOGGER,
                logging.WARNING if duration_ms > slow_call_ms else logging.INFO,
                f"{kind}_call_completed",
                tool=tool_name,
                correlation_id=correlation_id,
                duration_ms=duration_ms,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_tool", "SLOW_CALL_MS"]
