"""
Local Flag Store
Client-side record of "show in notification" flags that have been requested
but not yet confirmed by the database. Entries are dropped once the stored
enquiry carries the same value.

One instance is shared by every request thread; all access goes through a lock.
"""

import json
import logging
import os
import tempfile
import threading
from typing import Dict, Iterable, Optional

logger = logging.getLogger(__name__)


class LocalFlagStore:
    """Per-enquiry boolean flags, kept in memory and optionally mirrored to a JSON file"""

    def __init__(self, data_path: Optional[str] = None):
        self.data_path = data_path or None
        self.flags: Dict[str, bool] = {}
        self._lock = threading.Lock()
        if self.data_path:
            self._ensure_file_exists()
            self._load_data()

    def _ensure_file_exists(self):
        directory = os.path.dirname(self.data_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.data_path):
            self._save_data()

    def _save_data(self):
        """Write the flags atomically; caller holds the lock"""
        if not self.data_path:
            return
        directory = os.path.dirname(self.data_path) or "."
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".flags-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(self.flags, f, indent=2)
            os.replace(tmp_path, self.data_path)
        except BaseException:
            os.unlink(tmp_path)
            raise

    def _load_data(self):
        try:
            with open(self.data_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning(f"Flag store {self.data_path} is not valid JSON; starting empty")
            data = {}
        self.flags = {str(key): value is True for key, value in data.items()}

    def is_flagged(self, enquiry_id) -> bool:
        with self._lock:
            return self.flags.get(str(enquiry_id), False)

    def remember(self, enquiry_id, flagged: bool):
        with self._lock:
            self.flags[str(enquiry_id)] = bool(flagged)
            self._save_data()

    def discard(self, enquiry_id):
        with self._lock:
            if self.flags.pop(str(enquiry_id), None) is not None:
                self._save_data()

    def reconcile(self, enquiries: Iterable) -> int:
        """
        Drop entries the database has caught up with

        Returns:
            Number of entries discarded
        """
        with self._lock:
            confirmed = [
                str(e.id)
                for e in enquiries
                if str(e.id) in self.flags and e.flagged_for_notification is self.flags[str(e.id)]
            ]
            for key in confirmed:
                del self.flags[key]
            if confirmed:
                self._save_data()
        return len(confirmed)
