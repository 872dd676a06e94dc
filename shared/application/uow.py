"""
Unit of Work Pattern

Wraps a database transaction and makes sure domain events are published
only after the transaction has committed. Row locks taken inside the unit
of work (SELECT ... FOR UPDATE) are held until it exits.
"""

from abc import ABC, abstractmethod
from typing import List

import structlog
from django.db import transaction

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass

    @abstractmethod
    def collect_events(self, aggregate):
        """Collect events from aggregate root"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            # Lock rows, check them, write
            ...
            uow.collect_events(attempt)
            # Transaction commits here
        # Events are published after commit

    ``discard=True`` turns the unit of work into a read-only one: the
    transaction is always rolled back, even when the block succeeds.
    """

    def __init__(self, *, discard: bool = False, using: str | None = None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._discard = discard
        self._using = using

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic(using=self._using)
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None and not self._discard:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        """
        Schedule event publishing for after the commit

        transaction.on_commit() drops the callback if the outer
        transaction is rolled back later.
        """
        events = self._events.copy()
        self._events.clear()
        logger.debug("uow.commit", events=len(events))

        if events:
            transaction.on_commit(lambda: self._publish_events(events), using=self._using)

    def rollback(self):
        """Mark the transaction for rollback and discard events"""
        if self._discard:
            logger.debug("uow.discard", events=len(self._events))
        else:
            logger.warning("uow.rollback", discarded_events=len(self._events))
        self._events.clear()
        transaction.set_rollback(True, using=self._using)

    def collect_events(self, aggregate):
        """
        Collect events from aggregate root

        Moves the aggregate's pending events into this unit of work.
        """
        new_events = getattr(aggregate, 'events', None)
        if new_events:
            self._events.extend(new_events)
            aggregate.clear_events()
            logger.debug(
                "uow.events_collected",
                count=len(new_events),
                aggregate=aggregate.__class__.__name__,
                aggregate_id=str(aggregate.id),
            )

    def _publish_events(self, events: List[DomainEvent]):
        """Called by Django once the transaction has committed"""
        from shared.application.message_bus import message_bus

        logger.info("uow.publish", events=len(events))

        try:
            message_bus.publish_events(events)
        except Exception:
            # The data is committed already; a publishing failure is only logged
            logger.exception("uow.publish_failed", events=len(events))
