"""Delivery outcome metrics."""

from __future__ import annotations

from collections import Counter

from reminder_engine.schema import DeliveryOutcome, DeliveryResult

_SUPPRESSED = {DeliveryOutcome.SUPPRESSED_STALE, DeliveryOutcome.SUPPRESSED_DELETED}


def compute_metrics(results: list[DeliveryResult]) -> dict:
    """Compute alert, suppression, requeue and audio failure metrics."""

    if not results:
        return {
            "total": 0,
            "alerted": 0,
            "suppressed": 0,
            "snoozed": 0,
            "recurring": 0,
            "audio_failure_rate": 0.0,
            "by_kind": {},
        }

    outcomes = Counter(result.outcome for result in results)
    by_kind = Counter(result.notification.kind.value for result in results)
    alerted = [result for result in results if result.outcome not in _SUPPRESSED]
    failed = sum(1 for result in alerted if not result.success)

    return {
        "total": len(results),
        "alerted": len(alerted),
        "suppressed": sum(outcomes[o] for o in _SUPPRESSED),
        "snoozed": sum(1 for result in results if result.snooze_time is not None),
        "recurring": sum(1 for result in results if result.recurrence_time is not None),
        "audio_failure_rate": failed / len(alerted) if alerted else 0.0,
        "by_kind": dict(by_kind),
    }
