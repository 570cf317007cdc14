import csv
from pathlib import Path
from datetime import datetime

from keyrelay.src.logic.solve import CodeResult

RESULT_HEADERS = ["timestamp", "code", "robots", "presses", "numeric_value", "complexity"]


class SolveLogger:
    """CSV run log of solved codes, echoed to the console."""

    def __init__(self, log_dir: str, filename: str = "solve_log.csv"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / filename

        # Header only for a new file; later runs append
        if not self.log_file.exists():
            with open(self.log_file, 'w', newline='') as f:
                csv.writer(f).writerow(RESULT_HEADERS)

    def log(self, result: CodeResult, robots: int):
        """Append one solved code."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        print(
            f"[{timestamp}] {result.code} robots={robots} presses={result.presses} "
            f"complexity={result.complexity}"
        )

        with open(self.log_file, 'a', newline='') as f:
            csv.writer(f).writerow([
                timestamp,
                result.code,
                robots,
                result.presses,
                result.numeric_value,
                result.complexity,
            ])
