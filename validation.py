import re
from dataclasses import dataclass, field
from enum import Enum

FIELDS = ("name", "studentId", "email", "contact")

NAME_RE = re.compile(r"[A-Za-z ]{2,60}")
STUDENT_ID_RE = re.compile(r"[0-9]+")
# Shape check only, not RFC 5322.
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]{2,}")
CONTACT_RE = re.compile(r"[0-9]{10,}")


class ErrorKind(str, Enum):
    INVALID_FORMAT = "InvalidFormat"
    DUPLICATE_KEY = "DuplicateKey"


@dataclass(frozen=True)
class FieldError:
    kind: ErrorKind
    message: str


@dataclass
class ValidationResult:
    field_errors: dict = field(default_factory=dict)

    @classmethod
    def success(cls):
        return cls()

    @property
    def ok(self):
        return not self.field_errors

    def messages(self):
        """Field name -> message text, ready for the form."""
        return {name: err.message for name, err in self.field_errors.items()}


# ----------------- SANITIZERS -----------------
def only_digits(text):
    return re.sub(r"[^0-9]+", "", text or "")


def only_letters_spaces(text):
    return re.sub(r"[^a-zA-Z\s]+", "", text or "")


def build_record(raw):
    """Turn raw form input into a candidate record.

    Name keeps letters and spaces, studentId and contact keep digits, and every
    value is trimmed. Email is only trimmed.
    """
    name = only_letters_spaces(str(raw.get("name") or ""))
    student_id = only_digits(str(raw.get("studentId") or ""))
    email = str(raw.get("email") or "")
    contact = only_digits(str(raw.get("contact") or ""))
    return {
        "name": name.strip(),
        "studentId": student_id.strip(),
        "email": email.strip(),
        "contact": contact.strip(),
    }


# ----------------- VALIDATION -----------------
def _invalid(message):
    return FieldError(ErrorKind.INVALID_FORMAT, message)


def _check_name(value):
    if not value:
        return _invalid("Name is required.")
    if not NAME_RE.fullmatch(value):
        return _invalid("Use only letters and spaces (2–60 chars).")
    return None


def _check_student_id(value, collection, edit_position):
    if not value:
        return _invalid("Student ID is required.")
    if not STUDENT_ID_RE.fullmatch(value):
        return _invalid("Student ID must contain digits only.")
    for position, record in enumerate(collection):
        if position != edit_position and record.get("studentId") == value:
            return FieldError(ErrorKind.DUPLICATE_KEY, "Student ID must be unique.")
    return None


def _check_email(value):
    if not value:
        return _invalid("Email is required.")
    if not EMAIL_RE.fullmatch(value):
        return _invalid("Enter a valid email address.")
    return None


def _check_contact(value):
    if not value:
        return _invalid("Contact number is required.")
    if not CONTACT_RE.fullmatch(value):
        return _invalid("Contact must be at least 10 digits.")
    return None


def validate(candidate, collection, edit_position=None):
    """Check a candidate record against the field rules and the collection.

    Every field is checked, so all problems are reported at once. The record at
    ``edit_position`` is left out of the studentId uniqueness check, which lets
    a record be saved again without changing its ID.
    """
    errors = {
        "name": _check_name(candidate.get("name")),
        "studentId": _check_student_id(candidate.get("studentId"), collection, edit_position),
        "email": _check_email(candidate.get("email")),
        "contact": _check_contact(candidate.get("contact")),
    }
    field_errors = {name: err for name, err in errors.items() if err is not None}
    if not field_errors:
        return ValidationResult.success()
    return ValidationResult(field_errors)
