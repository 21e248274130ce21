"""Names of the store collections used by the school application."""

STUDENTS = "students"
TEACHERS = "teachers"
CLASSES = "classes"
SUBJECTS = "subjects"
FEES = "fees"
EMPLOYEES = "employees"
CLASS_TUITION_AMOUNTS = "class_ecolage_amounts"
TUITION_SETTINGS = "ecolage_settings"

ALL_COLLECTIONS = (
    STUDENTS,
    TEACHERS,
    CLASSES,
    SUBJECTS,
    FEES,
    EMPLOYEES,
    CLASS_TUITION_AMOUNTS,
    TUITION_SETTINGS,
)
