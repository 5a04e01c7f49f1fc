#!/usr/bin/env python3
"""
📈 Rolling Metrics History
Fixed-capacity window of recent snapshots. The decision engine averages
over it; get_stats() summarizes it for status reporting, including a
CPU trend that compares the last two samples with the older ones.
"""

from collections import deque
from typing import Any, Dict, Iterator, List

from .models import ResourceMetrics


class MetricsHistory:
    """Fixed-capacity rolling window of metrics snapshots. Not thread-safe."""

    def __init__(self, window_size: int = 60):
        if window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")
        self.window_size = window_size
        self.data = deque(maxlen=window_size)

    def append(self, metrics: ResourceMetrics) -> None:
        self.data.append(metrics)

    def snapshot(self) -> List[ResourceMetrics]:
        return list(self.data)

    def clear(self) -> None:
        self.data.clear()

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[ResourceMetrics]:
        return iter(list(self.data))

    def get_stats(self) -> Dict[str, Any]:
        if not self.data:
            return {"count": 0}

        cpu_values = [m.cpu for m in self.data]
        mem_values = [m.memory for m in self.data]

        avg_cpu = sum(cpu_values) / len(cpu_values)
        avg_mem = sum(mem_values) / len(mem_values)

        # trend: last two samples vs everything older
        if len(cpu_values) >= 4:
            recent_avg = sum(cpu_values[-2:]) / 2
            older_avg = sum(cpu_values[:-2]) / len(cpu_values[:-2])

            if recent_avg > older_avg + 20:
                trend = "spiking"
            elif recent_avg > older_avg + 10:
                trend = "increasing"
            elif recent_avg < older_avg - 10:
                trend = "decreasing"
            else:
                trend = "stable"
        else:
            trend = "stable"

        return {
            "avg_cpu": round(avg_cpu, 2),
            "avg_memory": round(avg_mem, 2),
            "max_cpu": max(cpu_values),
            "max_queue_length": max(m.queue_length for m in self.data),
            "trend": trend,
            "spike_detected": trend == "spiking",
            "count": len(self.data),
        }
