from __future__ import annotations

import pytest

from src.school_attendance.school_attendance.core.exceptions import ValidationError
from src.school_attendance.school_attendance.subjects.model import ScheduleEntry, Subject
from src.school_attendance.school_attendance.subjects.schedule import is_scheduled
from src.school_attendance.school_attendance.subjects.service import toggle_class

MATH = Subject(id="math", name="Math", schedule=(ScheduleEntry(day="Senin", class_ids=("1", "2")),))


@pytest.mark.parametrize(
    "day, class_id, expected",
    [
        ("Senin", "1", True),
        ("Senin", "2", True),
        ("Senin", "3", False),
        ("Selasa", "1", False),
        ("Senin", "ALL", True),
        ("Selasa", "ALL", False),
    ],
)
def test_is_scheduled(day, class_id, expected):
    assert is_scheduled(MATH, day, class_id) is expected


def test_subject_without_schedule_is_open_every_day():
    assert is_scheduled(Subject(id="pjok", name="PJOK"), "Kamis", "6") is True


def test_toggle_class_adds_and_removes():
    schedule = toggle_class(MATH.schedule, "Senin", "3")
    assert schedule == (ScheduleEntry("Senin", ("1", "2", "3")),)

    schedule = toggle_class(schedule, "Rabu", "1")
    assert schedule[-1] == ScheduleEntry("Rabu", ("1",))

    schedule = toggle_class(schedule, "Rabu", "1")
    assert [e.day for e in schedule] == ["Senin"]


def test_subject_service_crud_and_schedule(container, store):
    service = container.subject_service
    subject = service.add_subject("  IPA ")
    assert store.docs["subjects"][subject.id] == {"id": subject.id, "name": "IPA", "schedule": []}

    service.toggle_schedule(subject.id, day="Kamis", class_id="4")
    assert store.docs["subjects"][subject.id]["schedule"] == [{"day": "Kamis", "classIds": ["4"]}]

    updated = service.set_schedule(subject.id, {"Jumat": ["5", "1"], "Senin": []})
    assert updated.schedule == (ScheduleEntry("Jumat", ("1", "5")),)

    service.rename_subject(subject.id, "Ilmu Pengetahuan Alam")
    assert container.subject_service.get(subject.id).name == "Ilmu Pengetahuan Alam"

    service.delete_subject(subject.id)
    assert subject.id not in store.docs["subjects"]


@pytest.mark.parametrize(
    "kwargs",
    [{"day": "Minggu", "class_id": "1"}, {"day": "Senin", "class_id": "7"}],
)
def test_toggle_schedule_validates_day_and_class(container, kwargs):
    subject = container.subject_service.add_subject("Math")
    with pytest.raises(ValidationError):
        container.subject_service.toggle_schedule(subject.id, **kwargs)


def test_set_schedule_rejects_unknown_day(container):
    subject = container.subject_service.add_subject("Math")
    with pytest.raises(ValidationError):
        container.subject_service.set_schedule(subject.id, {"Minggu": ["1"]})
