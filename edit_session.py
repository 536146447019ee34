import logging
from enum import Enum

logger = logging.getLogger(__name__)


class EditState(str, Enum):
    COMPOSING = "composing"
    EDITING = "editing"


class EditSession:
    """Tracks whether the form is composing a new record or editing one.

    ``EditSession()`` starts composing. ``EditSession(position)`` restores an
    editing session, e.g. from a value kept between web requests.
    """

    def __init__(self, position=None):
        self.position = position

    @property
    def state(self):
        return EditState.COMPOSING if self.position is None else EditState.EDITING

    @property
    def is_editing(self):
        return self.position is not None

    def begin_edit(self, position, collection):
        """Start editing the record at ``position`` and return a draft copy of it."""
        if not 0 <= position < len(collection):
            raise IndexError(f"no record at position {position}")
        self.position = position
        logger.debug("Editing record at position %d", position)
        return dict(collection[position])

    def submitted(self):
        self.position = None

    def reset(self):
        self.position = None

    def record_removed(self, position):
        """Follow a removal from the collection.

        Removing the edited record returns to composing. Removing an earlier
        record shifts the edit position down by one so it keeps naming the same
        record; the browser version left its edit index pointing at whatever
        slid into the old slot, and this deliberately departs from that.
        """
        if self.position is None:
            return
        if position == self.position:
            # the record being edited is gone
            self.position = None
        elif position < self.position:
            self.position -= 1

    def __repr__(self):
        if self.position is None:
            return "EditSession(composing)"
        return f"EditSession(editing {self.position})"
