from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .academic.document_academic_repository import DocumentAcademicYearRepository, DocumentHolidayRepository
from .academic.service import AcademicYearService, HolidayService
from .attendance.document_attendance_repository import DocumentAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SCHOOL_CITY, DEFAULT_SCHOOL_NAME, DEFAULT_SYNC_POLL_SECONDS
from .database.connection import DBConfig, DatabaseConnection, is_store_configured
from .database.document_store import DocumentStore
from .database.mysql_document_store import MySQLDocumentStore
from .database.offline_store import OfflineDocumentStore
from .notifications.service import NotificationService
from .reports.service import ReportService
from .students.document_student_repository import DocumentStudentRepository
from .students.service import StudentService
from .subjects.document_subject_repository import DocumentSubjectRepository
from .subjects.service import SubjectService
from .sync.replica import Replica
from .sync.state import AppState
from .teachers.document_teacher_repository import DocumentHeadmasterRepository, DocumentTeacherRepository
from .teachers.service import AuthService, HeadmasterService, TeacherService


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    state: AppState
    replica: Replica

    students_repo: DocumentStudentRepository
    teachers_repo: DocumentTeacherRepository
    headmaster_repo: DocumentHeadmasterRepository
    years_repo: DocumentAcademicYearRepository
    holidays_repo: DocumentHolidayRepository
    subjects_repo: DocumentSubjectRepository
    attendance_repo: DocumentAttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    teacher_service: TeacherService
    headmaster_service: HeadmasterService
    year_service: AcademicYearService
    holiday_service: HolidayService
    subject_service: SubjectService
    attendance_service: AttendanceService
    report_service: ReportService
    notification_service: NotificationService

    school_name: str = DEFAULT_SCHOOL_NAME
    school_city: str = DEFAULT_SCHOOL_CITY


def build_store(db_config: Optional[dict]) -> DocumentStore:
    """MySQL-backed store, or the offline stand-in when no store is configured."""
    if not is_store_configured(db_config):
        return OfflineDocumentStore()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return MySQLDocumentStore(conn)


def build_container(
    *,
    db_config: Optional[dict] = None,
    store: Optional[DocumentStore] = None,
    school_name: str = DEFAULT_SCHOOL_NAME,
    school_city: str = DEFAULT_SCHOOL_CITY,
    poll_seconds: float = DEFAULT_SYNC_POLL_SECONDS,
) -> Container:
    store = store if store is not None else build_store(db_config)
    state = AppState(connected=store.connected)
    replica = Replica(store, state, poll_seconds=poll_seconds)

    students_repo = DocumentStudentRepository(store, state)
    teachers_repo = DocumentTeacherRepository(store, state)
    headmaster_repo = DocumentHeadmasterRepository(store, state)
    years_repo = DocumentAcademicYearRepository(store, state)
    holidays_repo = DocumentHolidayRepository(store, state)
    subjects_repo = DocumentSubjectRepository(store, state)
    attendance_repo = DocumentAttendanceRepository(store, state)

    attendance_service = AttendanceService(attendance_repo, students_repo, years_repo, holidays_repo, subjects_repo)

    return Container(
        store=store,
        state=state,
        replica=replica,
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        headmaster_repo=headmaster_repo,
        years_repo=years_repo,
        holidays_repo=holidays_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(teachers_repo, students_repo),
        student_service=StudentService(students_repo, years_repo),
        teacher_service=TeacherService(teachers_repo),
        headmaster_service=HeadmasterService(headmaster_repo),
        year_service=AcademicYearService(years_repo),
        holiday_service=HolidayService(holidays_repo),
        subject_service=SubjectService(subjects_repo),
        attendance_service=attendance_service,
        report_service=ReportService(
            attendance_repo, students_repo, holidays_repo, subjects_repo, teachers_repo, headmaster_repo
        ),
        notification_service=NotificationService(attendance_service, school_name=school_name),
        school_name=school_name,
        school_city=school_city,
    )
