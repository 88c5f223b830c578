"""
Service interfaces for dependency inversion.
Allows swapping scheduling models without changing the routes.
"""

from .scheduling import SchedulingCore
from .exclusive import ExclusiveScheduler
from .shared import SharedSlotScheduler

__all__ = ['SchedulingCore', 'ExclusiveScheduler', 'SharedSlotScheduler']
