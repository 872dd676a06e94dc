"""
Message Bus

Routes domain events to the handlers subscribed to them. Apps subscribe in
their AppConfig.ready(); the unit of work publishes after commit.
"""

from typing import Callable, Dict, Iterable, List, Type

import structlog

from shared.domain.base import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    In-process event bus

    Several handlers may subscribe to one event type (1:N). Handlers run
    synchronously, in subscription order.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe a handler; subscribing the same handler twice is a no-op"""
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("bus.handler_registered", event_type=event_type.__name__, handler=handler.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, []))

    def publish_events(self, events: Iterable[DomainEvent]):
        """
        Publish domain events

        Errors in handlers are logged but don't stop other handlers.
        """
        for event in events:
            handlers = self.handlers_for(type(event))

            if not handlers:
                logger.warning("bus.unhandled_event", event_type=event.event_type)
                continue

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "bus.handler_failed",
                        event_type=event.event_type,
                        event_id=str(event.event_id),
                        handler=handler.__name__,
                    )


# Global message bus instance
message_bus = MessageBus()
