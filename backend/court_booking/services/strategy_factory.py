"""
Scheduling strategy factory.
Configures which scheduling model the deployment runs.
"""

from typing import Optional

from court_booking.core.config import get_settings
from court_booking.services.business_hours import get_business_hours
from court_booking.services.interfaces.exclusive import ExclusiveScheduler
from court_booking.services.interfaces.scheduling import SchedulingCore
from court_booking.services.interfaces.shared import SharedSlotScheduler

EXCLUSIVE = "exclusive"
SHARED = "shared"
SCHEDULING_MODES = (EXCLUSIVE, SHARED)


def build_scheduler(mode: str) -> SchedulingCore:
    """
    Build the scheduler for a mode:
    - exclusive: ExclusiveScheduler with the configured business hours
    - shared: SharedSlotScheduler with SHARED_SLOT_CAPACITY
    """
    if mode == EXCLUSIVE:
        return ExclusiveScheduler(get_business_hours())
    if mode == SHARED:
        return SharedSlotScheduler(get_settings().SHARED_SLOT_CAPACITY)
    raise ValueError(f"Unknown scheduling mode {mode!r}, expected one of {SCHEDULING_MODES}")


# Singleton instance
_scheduler: Optional[SchedulingCore] = None


def get_scheduler() -> SchedulingCore:
    """FastAPI dependency returning the configured scheduler singleton."""
    global _scheduler
    if _scheduler is None:
        _scheduler = build_scheduler(get_settings().SCHEDULING_MODE)
    return _scheduler
