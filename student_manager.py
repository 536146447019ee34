import json
import logging

import pandas as pd

from validation import FIELDS, validate

logger = logging.getLogger(__name__)

STORAGE_KEY = "srs_students_v1"


class StudentManager:
    """Ordered collection of student records, persisted to one storage slot.

    The manager does not validate. Callers run ``validation.validate`` first
    (``submit`` below does the whole sequence).
    """

    def __init__(self, slots, key=STORAGE_KEY):
        self.slots = slots
        self.key = key
        self.students = []
        self.load()

    def __len__(self):
        return len(self.students)

    # ----------------- PERSISTENCE -----------------
    def load(self):
        """Read the stored snapshot; anything unreadable loads as empty."""
        self.students = self._read_snapshot()
        logger.info("Loaded %d students from slot %s", len(self.students), self.key)
        return self.all_students()

    def _read_snapshot(self):
        try:
            raw = self.slots.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read students from slot %s: %s", self.key, e)
            return []
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Ignoring unreadable students snapshot in slot %s: %s", self.key, e)
            return []
        if not isinstance(parsed, list):
            logger.warning("Ignoring students snapshot in slot %s: expected a list, got %s",
                           self.key, type(parsed).__name__)
            return []
        students = [s for s in parsed if isinstance(s, dict)]
        if len(students) != len(parsed):
            logger.warning("Dropped %d non-record entries from slot %s", len(parsed) - len(students), self.key)
        return students

    def persist(self):
        """Write the whole collection to the slot. Returns False if the write failed."""
        try:
            self.slots.set(self.key, json.dumps(self.students, ensure_ascii=False))
        except OSError:
            logger.exception("Error saving students to slot %s", self.key)
            return False
        return True

    # ----------------- MUTATIONS -----------------
    def _check_position(self, position):
        if not 0 <= position < len(self.students):
            raise IndexError(f"no student at position {position}")

    def add(self, record):
        self.students.append(dict(record))
        logger.debug("Added student %s", record.get("studentId"))
        self.persist()

    def update_at(self, position, record):
        self._check_position(position)
        self.students[position] = dict(record)
        logger.debug("Updated student at position %d", position)
        self.persist()

    def remove_at(self, position):
        self._check_position(position)
        removed = self.students.pop(position)
        logger.debug("Removed student %s", removed.get("studentId"))
        self.persist()
        return removed

    def clear_all(self):
        self.students = []
        self.persist()

    # ----------------- QUERIES -----------------
    def get(self, position):
        self._check_position(position)
        return dict(self.students[position])

    def all_students(self):
        return [dict(s) for s in self.students]

    def export_to_excel(self, target):
        """Write the students to an Excel sheet at a path or binary buffer."""
        df = pd.DataFrame(self.students, columns=list(FIELDS))
        df.to_excel(target, index=False, sheet_name="Students")


def submit(manager, edit_session, candidate):
    """Validate a candidate and, if it passes, add it or replace the edited record."""
    result = validate(candidate, manager.students, edit_session.position)
    if not result.ok:
        return result
    if edit_session.is_editing:
        manager.update_at(edit_session.position, candidate)
    else:
        manager.add(candidate)
    edit_session.submitted()
    return result
