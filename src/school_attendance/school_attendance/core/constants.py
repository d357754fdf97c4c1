"""Constants and defaults.

Note: collection names here are also the document store keys.
"""

CLASS_LIST = ("1", "2", "3", "4", "5", "6")
ALL_CLASSES = "ALL"

# Monday-first; Sunday is handled separately.
DAYS_OF_WEEK = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu")
SUNDAY = "Minggu"

MONTH_NAMES = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)

ADMIN_ID = "admin"
HEADMASTER_DOC_ID = "headmaster"

DEFAULT_SCHOOL_NAME = "SD Negeri 5 Bilato"
DEFAULT_SCHOOL_CITY = "Bilato"
DEFAULT_SYNC_POLL_SECONDS = 2.0

UNKNOWN_YEAR = "Unknown"
SIGNATURE_PLACEHOLDER_NAME = "( ..................................... )"
SIGNATURE_PLACEHOLDER_NIP = "....................................."

# Collections in the document store.
STUDENTS = "students"
TEACHERS = "teachers"
ATTENDANCE = "attendance"
SUBJECT_ATTENDANCE = "subjectAttendance"
SUBJECTS = "subjects"
ACADEMIC_YEARS = "academicYears"
HOLIDAYS = "holidays"
ALUMNI = "alumni"
SETTINGS = "settings"

ALL_COLLECTIONS = (
    STUDENTS,
    TEACHERS,
    ATTENDANCE,
    SUBJECT_ATTENDANCE,
    SUBJECTS,
    ACADEMIC_YEARS,
    HOLIDAYS,
    ALUMNI,
    SETTINGS,
)
