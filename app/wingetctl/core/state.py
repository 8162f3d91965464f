"""Run history persistence.

One JSON object per line, appended after every executed `apply` run.
"""

import json
import logging
from pathlib import Path

from wingetctl.core.paths import get_state_dir
from wingetctl.models.history import RunRecord

logger = logging.getLogger(__name__)


class StateManager:
    """Reads and appends run records in <state dir>/history.jsonl.

    Records are never rewritten; a corrupt line only costs that line.

    Attributes:
        state_dir: Directory containing the history file.
    """

    HISTORY_FILENAME = "history.jsonl"

    def __init__(self, state_dir: Path | None = None) -> None:
        """Initialize StateManager.

        Args:
            state_dir: Optional override for state directory.
                      Default: ~/.local/state/wingetctl
        """
        self._state_dir = state_dir if state_dir is not None else get_state_dir()

    @property
    def history_path(self) -> Path:
        """Path to history.jsonl file."""
        return self._state_dir / self.HISTORY_FILENAME

    def record_run(self, record: RunRecord) -> None:
        """Append a run record to the history file.

        Creates file and parent directories if they don't exist.

        Args:
            record: The run record to append.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self._state_dir.mkdir(parents=True, exist_ok=True)

        with self.history_path.open(mode="a", encoding="utf-8") as f:
            f.write(record.to_json_line() + "\n")
            f.flush()

    def get_history(self, limit: int | None = None) -> list[RunRecord]:
        """Read run records, newest first.

        Args:
            limit: Maximum number of records to return.
                  If None, returns all records.

        Returns:
            List of RunRecord, newest first.
            Returns empty list if file doesn't exist.
        """
        if not self.history_path.exists():
            return []

        records: list[RunRecord] = []

        with self.history_path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    records.append(RunRecord.from_json_line(line))
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt history line %d: %s", line_num, str(e))

        records.reverse()

        if limit is not None:
            return records[:limit]
        return records
