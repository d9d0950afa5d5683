"""Processing-cost measurement and degradation heuristics."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .config import settings

logger = logging.getLogger("data-inspector")


@dataclass(frozen=True)
class PerformanceThresholds:
    render_time_warning_ms: float = 100.0
    render_time_critical_ms: float = 500.0
    row_count_critical: int = 1000
    data_size_critical_bytes: int = 1024 * 1024

    @classmethod
    def from_settings(cls, config=None) -> "PerformanceThresholds":
        config = config or settings
        return cls(
            render_time_warning_ms=config.RENDER_TIME_WARNING_MS,
            render_time_critical_ms=config.RENDER_TIME_CRITICAL_MS,
            row_count_critical=config.ROW_COUNT_CRITICAL,
            data_size_critical_bytes=config.DATA_SIZE_CRITICAL_BYTES,
        )


@dataclass(frozen=True)
class PerformanceMetrics:
    render_time_ms: float
    row_count: int
    data_size: int
    timestamp: float
    label: str = ''


EndMeasurement = Callable[..., PerformanceMetrics]


class PerformanceMonitor:
    """Times operations and keeps a bounded history of their metrics.

    Instances are independent; construct one per tool (or per test).
    """

    def __init__(
        self,
        thresholds: Optional[PerformanceThresholds] = None,
        max_history: Optional[int] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.thresholds = thresholds or PerformanceThresholds.from_settings()
        self.max_history = max_history if max_history is not None else settings.MAX_METRICS_HISTORY
        self._clock = clock
        self._metrics: List[PerformanceMetrics] = []

    @property
    def history(self) -> List[PerformanceMetrics]:
        return list(self._metrics)

    def start_measurement(self, label: str) -> EndMeasurement:
        started = self._clock()

        def end(row_count: int = 0, data_size: int = 0) -> PerformanceMetrics:
            elapsed_ms = (self._clock() - started) * 1000.0
            metrics = PerformanceMetrics(
                render_time_ms=elapsed_ms,
                row_count=row_count,
                data_size=data_size,
                timestamp=time.time(),
                label=label,
            )
            self._record(metrics)
            self._log_warnings(label, metrics)
            return metrics

        return end

    def _record(self, metrics: PerformanceMetrics) -> None:
        self._metrics.append(metrics)
        if len(self._metrics) > self.max_history:
            self._metrics = self._metrics[-self.max_history:]

    def _log_warnings(self, label: str, metrics: PerformanceMetrics) -> None:
        t = self.thresholds
        warnings: List[str] = []

        if metrics.render_time_ms > t.render_time_critical_ms:
            warnings.append(f"Critical processing time: {metrics.render_time_ms:.2f}ms")
        elif metrics.render_time_ms > t.render_time_warning_ms:
            warnings.append(f"Slow processing time: {metrics.render_time_ms:.2f}ms")

        if metrics.row_count > t.row_count_critical:
            warnings.append(f"High row count: {metrics.row_count} rows")

        if metrics.data_size > t.data_size_critical_bytes:
            warnings.append(f"Large data size: {metrics.data_size / 1024 / 1024:.2f}MB")

        if warnings:
            logger.warning(f"[Performance] {label}: {', '.join(warnings)}")

    def is_performance_degraded(self, metrics: PerformanceMetrics) -> bool:
        t = self.thresholds
        return (
            metrics.render_time_ms > t.render_time_warning_ms
            or metrics.row_count > t.row_count_critical
            or metrics.data_size > t.data_size_critical_bytes
        )

    def get_performance_recommendations(self, metrics: PerformanceMetrics) -> List[str]:
        """Suggestions ordered from most to least impactful."""
        t = self.thresholds
        recommendations: List[str] = []

        if metrics.render_time_ms > t.render_time_critical_ms:
            recommendations.append("Reduce the number of rows shown per page")
            recommendations.append("Split the input into smaller files")
        elif metrics.render_time_ms > t.render_time_warning_ms:
            recommendations.append("Show fewer rows per page to speed up rendering")

        if metrics.row_count > t.row_count_critical:
            recommendations.append("Use pagination with a smaller page size")
            recommendations.append("Filter rows before loading them into the viewer")

        if metrics.data_size > t.data_size_critical_bytes:
            recommendations.append("Use file upload instead of pasting large content")
            recommendations.append("Consider compressing or chunking the data")

        return recommendations

    def get_average_metrics(self) -> Optional[Dict[str, float]]:
        if not self._metrics:
            return None
        count = len(self._metrics)
        return {
            'render_time_ms': sum(m.render_time_ms for m in self._metrics) / count,
            'row_count': sum(m.row_count for m in self._metrics) / count,
            'data_size': sum(m.data_size for m in self._metrics) / count,
        }

    def clear_metrics(self) -> None:
        self._metrics = []


def format_performance_warning(metrics: PerformanceMetrics, recommendations: List[str], limit: int = 2) -> str:
    text = f"Large dataset detected ({metrics.row_count} rows, {metrics.data_size / 1024:.1f}KB)."
    shown = recommendations[:limit]
    if shown:
        text += " " + ". ".join(shown)
    return text
