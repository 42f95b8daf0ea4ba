"""Observability utilities for structured logging and optional telemetry."""

from __future__ import annotations

import contextlib
import time
from typing import Dict, Iterator, Mapping, Optional

from . import logging_manager as log_mgr

logger = log_mgr.get_logger().getChild("observability")

try:  # pragma: no cover - optional dependency
    from opentelemetry import metrics, trace
except Exception:  # pragma: no cover - optional dependency
    metrics = None  # type: ignore
    trace = None  # type: ignore


_tracer = trace.get_tracer("hoverdict.lookup") if trace else None
_meter = metrics.get_meter("hoverdict.lookup") if metrics else None
_histograms: Dict[str, object] = {}


def _get_histogram(name: str):  # pragma: no cover - simple helper
    if _meter is None:
        return None
    histogram = _histograms.get(name)
    if histogram is None:
        histogram = _meter.create_histogram(name)
        _histograms[name] = histogram
    return histogram


def record_metric(
    name: str,
    value: float,
    attributes: Optional[Mapping[str, object]] = None,
) -> None:
    """Record a numeric observation, using OpenTelemetry when available."""

    histogram = _get_histogram(name)
    attributes = dict(attributes or {})
    if histogram is not None:
        try:  # pragma: no cover - dependent on optional OTEL runtime
            histogram.record(value, attributes=attributes)
            return
        except Exception as exc:  # pragma: no cover - exporter failure
            logger.debug(
                "Failed to export metric via OpenTelemetry",
                extra={
                    "event": "observability.metric_export_error",
                    "metric": name,
                    "error": str(exc),
                },
            )

    logger.debug(
        "Metric recorded",
        extra={
            "event": "observability.metric_recorded",
            "metric": name,
            "value": value,
            "attributes": attributes,
        },
    )


@contextlib.contextmanager
def _maybe_span(name: str, attributes: Mapping[str, object]):  # pragma: no cover - thin wrapper
    if _tracer is None:
        yield None
        return
    with _tracer.start_as_current_span(name, attributes=dict(attributes)) as span:
        yield span


@contextlib.contextmanager
def lookup_stage(stage: str, attributes: Optional[Mapping[str, object]] = None) -> Iterator[None]:
    """Instrument one lookup pipeline stage with structured logging and optional telemetry."""

    attrs = dict(attributes or {})
    with log_mgr.log_context(stage=stage):
        start = time.perf_counter()
        logger.debug(
            "Stage started",
            extra={"event": "lookup.stage.start", "attributes": attrs},
        )
        with _maybe_span(f"lookup.stage.{stage}", attrs):
            yield
        duration_ms = (time.perf_counter() - start) * 1000.0
        record_metric("lookup.stage.duration", duration_ms, {**attrs, "stage": stage})
        logger.debug(
            "Stage completed",
            extra={
                "event": "lookup.stage.complete",
                "duration_ms": round(duration_ms, 2),
                "attributes": attrs,
            },
        )


__all__ = ["lookup_stage", "record_metric"]
