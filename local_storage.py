import json
import logging
import os
import tempfile
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class LocalHabitStorage:
    """Stores the tracker snapshot as a JSON file on local disk"""

    def __init__(self, storage_file: str = 'habits-data.json'):
        self.storage_file = storage_file

    def load(self) -> Optional[Dict[str, Any]]:
        """Load the snapshot; None when the file is missing or unreadable"""
        if not os.path.exists(self.storage_file):
            logger.info("No data file at %s, starting fresh", self.storage_file)
            return None
        try:
            with open(self.storage_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
            logger.warning("Error loading habits from %s: %s", self.storage_file, e)
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.storage_file)
            return None
        return data

    def save(self, snapshot: Dict[str, Any]) -> None:
        """Write the snapshot, replacing the previous file in one step"""
        directory = os.path.dirname(os.path.abspath(self.storage_file))
        os.makedirs(directory, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=directory, suffix=".tmp", delete=False
        ) as f:
            json.dump(snapshot, f, indent=2, ensure_ascii=False)
            tmp = f.name
        try:
            os.replace(tmp, self.storage_file)
        except OSError:
            os.remove(tmp)
            raise

    def clear(self) -> bool:
        """Delete the data file"""
        if os.path.exists(self.storage_file):
            os.remove(self.storage_file)
            return True
        return False
