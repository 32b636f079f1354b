"""Screen-level services binding the UI to the remote documents.

Responsibilities:
    - profile: biometric fields, live profile document, photo upload
    - stress: weekly levels, colour bands and summaries
    - measurement: simulated ECG frames and the resulting reading
    - events: agenda CRUD, live query and date grouping
    - recommendations: static stress-relief cards

Every operation takes an explicit Session instead of a global current user.
"""

from serenity.services.events import EventService, group_by_date
from serenity.services.measurement import MeasurementService
from serenity.services.profile import ProfileService
from serenity.services.stress import StressService, bar_band

__all__ = [
    "EventService",
    "MeasurementService",
    "ProfileService",
    "StressService",
    "bar_band",
    "group_by_date",
]
