import logging
import os
import tempfile

logger = logging.getLogger(__name__)


class FileSlotStore:
    """Durable key-value slots, one UTF-8 file per key."""

    def __init__(self, directory):
        self.directory = os.fspath(directory)

    def _path(self, key):
        return os.path.join(self.directory, f"{key}.json")

    def get(self, key):
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key, text):
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, self._path(key))
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug("Wrote slot %s (%d chars)", key, len(text))


class MemorySlotStore:
    """Dict-backed slots with the same interface as FileSlotStore."""

    def __init__(self, initial=None):
        self.slots = dict(initial or {})

    def get(self, key):
        return self.slots.get(key)

    def set(self, key, text):
        self.slots[key] = text
