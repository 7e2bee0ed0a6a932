from .student_record import FIELD_NAMES, StudentRecord, new_record_id

__all__ = [
    "FIELD_NAMES",
    "StudentRecord",
    "new_record_id",
]
