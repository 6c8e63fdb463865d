"""
Scheduler orchestrator: one pass over every notification rule.

A run loads all relevant entities in batches, evaluates each one, filters the
candidates through the deduplication gate and writes what is left. It keeps no
state between runs; everything that says "already notified" lives in the
database, so a run that dies halfway can simply be repeated.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from .candidates import NotificationCandidate
from .evaluators import EVALUATORS, local_today
from .exceptions import (
    ConfigurationError,
    DuplicateNotification,
    EvaluationError,
    PersistenceError,
)
from .gate import DeduplicationGate
from .loader import load_candidates
from .preferences import resolve_preferences
from .transactions import record_recurring_payment
from .writer import NotificationWriter

logger = logging.getLogger(__name__)


@dataclass
class ItemFailure:
    kind: str
    entity_id: Optional[int]
    error_kind: str
    reason: str


@dataclass
class RunSummary:
    started_at: datetime
    finished_at: Optional[datetime] = None
    evaluated: int = 0
    candidates: int = 0
    created: int = 0
    deduplicated: int = 0
    transactions_created: int = 0
    failed: int = 0
    failures: List[ItemFailure] = field(default_factory=list)
    aborted: bool = False
    abort_reason: Optional[str] = None

    def record_failure(self, kind: str, entity_id, exc: Exception) -> None:
        self.failed += 1
        self.failures.append(
            ItemFailure(
                kind=kind,
                entity_id=entity_id,
                error_kind=type(exc).__name__,
                reason=str(exc),
            )
        )

    def to_dict(self) -> Dict:
        return asdict(self)

    def __str__(self):
        if self.aborted:
            return f"aborted: {self.abort_reason}"
        return (
            f"evaluated={self.evaluated} created={self.created} "
            f"deduplicated={self.deduplicated} "
            f"transactions={self.transactions_created} failed={self.failed}"
        )


class NotificationOrchestrator:
    def __init__(
        self,
        clock: Callable[[], datetime] = timezone.now,
        gate: Optional[DeduplicationGate] = None,
        writer: Optional[NotificationWriter] = None,
        transaction_handler: Callable = record_recurring_payment,
        loader: Callable = load_candidates,
        evaluators: Optional[Dict[str, tuple]] = None,
    ):
        self.clock = clock
        self.gate = gate or DeduplicationGate()
        self.writer = writer or NotificationWriter()
        self.transaction_handler = transaction_handler
        self.loader = loader
        self.evaluators = evaluators or EVALUATORS

    def run_all_checks(self) -> RunSummary:
        """Evaluate every rule against current state and write new notifications."""
        now = self.clock()
        summary = RunSummary(started_at=now)
        logger.info("Running all notification checks at %s", now.isoformat())

        try:
            batches = self.loader(local_today(now))
        except DatabaseError as exc:
            # Nothing written yet; the next trigger retries from scratch
            logger.error("Notification checks aborted, could not load candidates: %s", exc)
            summary.aborted = True
            summary.abort_reason = str(exc)
            summary.finished_at = self.clock()
            return summary

        preferences_by_user = {}
        for kind, entities in batches.items():
            for entity in entities:
                summary.evaluated += 1
                self._process_entity(kind, entity, now, summary, preferences_by_user)

        summary.finished_at = self.clock()
        logger.info("All notification checks completed: %s", summary)
        return summary

    def _process_entity(self, kind, entity, now, summary, preferences_by_user):
        user = entity.user
        if user.pk not in preferences_by_user:
            try:
                preferences_by_user[user.pk] = resolve_preferences(user)
            except Exception as exc:
                logger.error(
                    "Could not resolve preferences for user %s: %s", user.pk, exc, exc_info=True
                )
                summary.record_failure(kind, entity.pk, ConfigurationError(str(exc)))
                return
        preferences = preferences_by_user[user.pk]

        for evaluator in self.evaluators.get(kind, ()):
            try:
                result = evaluator(user, preferences, entity, now)
            except EvaluationError as exc:
                logger.warning("Skipping %s %s: %s", kind, entity.pk, exc)
                summary.record_failure(kind, entity.pk, exc)
                continue
            except Exception as exc:
                logger.error(
                    "Evaluator %s failed for %s %s: %s",
                    evaluator.__name__,
                    kind,
                    entity.pk,
                    exc,
                    exc_info=True,
                )
                summary.record_failure(kind, entity.pk, EvaluationError(str(exc)))
                continue

            if result is None:
                continue
            candidates = result if isinstance(result, list) else [result]
            for candidate in candidates:
                summary.candidates += 1
                self._emit_isolated(kind, candidate, entity, summary)

    def _emit_isolated(self, kind, candidate, entity, summary):
        try:
            self._emit(candidate, entity, summary)
        except DuplicateNotification:
            summary.deduplicated += 1
        except PersistenceError as exc:
            logger.error("Failed to persist notification for %s %s: %s", kind, entity.pk, exc)
            summary.record_failure(kind, entity.pk, exc)
        except DatabaseError as exc:
            logger.error("Failed to persist notification for %s %s: %s", kind, entity.pk, exc)
            summary.record_failure(kind, entity.pk, PersistenceError(str(exc)))
        except Exception as exc:
            logger.error(
                "Unexpected error handling %s %s: %s", kind, entity.pk, exc, exc_info=True
            )
            summary.record_failure(kind, entity.pk, exc)

    def _emit(self, candidate: NotificationCandidate, entity, summary: RunSummary) -> None:
        booked = None
        created = False
        # Booking and notification land together; a failed write leaves the
        # cycle due so the next run retries both
        with transaction.atomic():
            if candidate.transaction_request is not None:
                booked = self.transaction_handler(candidate.transaction_request)
            if candidate.notify:
                if self.gate.should_emit(candidate):
                    self.writer.commit(
                        candidate, transaction_id=booked.pk if booked is not None else None
                    )
                    created = True
                else:
                    summary.deduplicated += 1

        if booked is not None:
            summary.transactions_created += 1
        if created:
            summary.created += 1
            # Keep the in-memory entity in step for the remaining evaluators
            for field_name, value in candidate.source_updates.items():
                setattr(entity, field_name, value)


def run_all_checks() -> RunSummary:
    """Run every notification check once with the default collaborators."""
    return NotificationOrchestrator().run_all_checks()
