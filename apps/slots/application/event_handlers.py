"""
Slot Event Handlers

Subscribed to the message bus in SlotsConfig.ready().
"""

import structlog

from apps.slots.domain.events import SlotMaintenanceScheduled, SlotReleased
from shared.application.message_bus import message_bus

logger = structlog.get_logger(__name__)


def log_maintenance_scheduled(event: SlotMaintenanceScheduled):
    logger.info("slot.maintenance_scheduled", **event.to_dict())


def log_slot_released(event: SlotReleased):
    logger.info("slot.released", **event.to_dict())


def register_handlers(bus=message_bus):
    bus.register_event_handler(SlotMaintenanceScheduled, log_maintenance_scheduled)
    bus.register_event_handler(SlotReleased, log_slot_released)
