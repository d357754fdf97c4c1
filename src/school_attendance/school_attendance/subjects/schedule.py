from __future__ import annotations

from ..core.constants import ALL_CLASSES
from .model import Subject


def is_scheduled(subject: Subject, day_name: str, class_id: str) -> bool:
    """Whether the subject is taught to class_id on day_name.

    A subject without any schedule entries is open every day. For the
    all-classes selector the day counts when any class has the lesson.
    """
    if not subject.schedule:
        return True

    entry = subject.entry_for(day_name)
    if entry is None:
        return False

    if class_id == ALL_CLASSES:
        return bool(entry.class_ids)
    return class_id in entry.class_ids
