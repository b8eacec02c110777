import json
import os
from datetime import datetime, timezone

OUTCOME_FILES = {
    "halted": "halted",
    "stuck": "stuck",
    "rejected": "rejected",
    "budget_exceeded": "exhausted",
    "cancelled": "exhausted",
}

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="tm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of entries to the main run log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def rotate(self):
        """Pick up a new date and start a new main log file."""
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def log_summary(self, entries: list):
        """Log summary info (outcome, steps, final state) to the main run log."""
        self.log_batch(entries)

    def log_outcome(self, entry: dict):
        """Log a run entry to the file for its outcome kind, e.g. stuck_<date>.jsonl."""
        kind = OUTCOME_FILES.get(entry.get("outcome"))
        if kind is None:
            raise ValueError(f"Unknown outcome in log entry: {entry.get('outcome')!r}")
        self._log_to_file(f"{kind}_{self.today}.jsonl", [entry])
