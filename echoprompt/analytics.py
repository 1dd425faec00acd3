"""Pure aggregation functions over generation outcome events."""

from math import floor
from typing import Dict, Iterable, List

from .models import EVENT_AI_FALLBACK, EVENT_AI_SUCCESS, AnalyticsEvent

RECENT_EVENT_LIMIT = 10


def compute_generation_stats(events: Iterable[AnalyticsEvent]) -> Dict:
    """Compute AI success/fallback statistics from generation events."""
    events_list = [
        event for event in events if event.event_type in (EVENT_AI_SUCCESS, EVENT_AI_FALLBACK)
    ]
    if not events_list:
        return empty_generation_stats()

    success_count = sum(1 for event in events_list if event.event_type == EVENT_AI_SUCCESS)
    fallback_count = len(events_list) - success_count
    total_attempts = len(events_list)

    by_event_type: Dict[str, Dict] = {}
    for event_type in (EVENT_AI_SUCCESS, EVENT_AI_FALLBACK):
        group = [event for event in events_list if event.event_type == event_type]
        if group:
            by_event_type[event_type] = _summarize_group(group)

    by_provider: Dict[str, int] = {}
    for event in events_list:
        provider = event.ai_provider or "unknown"
        by_provider[provider] = by_provider.get(provider, 0) + 1

    recent = sorted(events_list, key=lambda event: event.created_at, reverse=True)
    recent = recent[:RECENT_EVENT_LIMIT]

    return {
        "success_rate": round(success_count / total_attempts * 100, 2),
        "total_attempts": total_attempts,
        "success_count": success_count,
        "fallback_count": fallback_count,
        "by_event_type": by_event_type,
        "by_provider": by_provider,
        "recent_events": [_event_summary(event) for event in recent],
    }


def empty_generation_stats() -> Dict:
    """Return empty generation stats structure."""
    return {
        "success_rate": 0.0,
        "total_attempts": 0,
        "success_count": 0,
        "fallback_count": 0,
        "by_event_type": {},
        "by_provider": {},
        "recent_events": [],
    }


def _summarize_group(group: List[AnalyticsEvent]) -> Dict:
    times = [event.generation_time_ms for event in group if event.generation_time_ms is not None]
    words = [event.word_count for event in group if event.word_count is not None]
    chars = [event.character_count for event in group if event.character_count is not None]

    return {
        "count": len(group),
        "avg_generation_time_ms": round(sum(times) / len(times), 2) if times else 0,
        "avg_word_count": round(sum(words) / len(words)) if words else 0,
        "avg_character_count": round(sum(chars) / len(chars)) if chars else 0,
        "generation_time_percentiles_ms": _compute_percentiles(times),
    }


def _event_summary(event: AnalyticsEvent) -> Dict:
    return {
        "event_type": event.event_type,
        "ai_provider": event.ai_provider,
        "generation_time_ms": event.generation_time_ms,
        "word_count": event.word_count,
        "optimized": event.optimized,
        "created_at": event.created_at.isoformat(),
    }


def _compute_percentiles(values: Iterable[float]) -> Dict[str, float]:
    points = [50, 90, 95, 99]
    sorted_values = sorted(float(value) for value in values)
    if not sorted_values:
        return _empty_percentiles()

    return {f"p{point}": _percentile(sorted_values, point / 100) for point in points}


def _percentile(sorted_values: list[float], quantile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return sorted_values[0]

    position = quantile * (len(sorted_values) - 1)
    lower_index = floor(position)
    upper_index = min(lower_index + 1, len(sorted_values) - 1)
    lower_value = sorted_values[lower_index]
    upper_value = sorted_values[upper_index]
    weight = position - lower_index
    return lower_value + (upper_value - lower_value) * weight


def _empty_percentiles() -> Dict[str, float]:
    return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
