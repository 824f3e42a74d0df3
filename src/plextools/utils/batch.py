"""Summary of a multi-item operation that keeps going after per-item failures."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from plextools.utils.constants import STATUS_FAIL, STATUS_MOVED, STATUS_OK, STATUS_SKIP


@dataclass
class BatchResult:
    """Ordered (source, target, status) records for each item of a batch."""
    results: List[Tuple[Path, Optional[Path], str]] = field(default_factory=list)

    def add(self, source: Path, target: Optional[Path], status: str) -> None:
        self.results.append((source, target, status))

    @property
    def ok(self) -> int:
        return sum(1 for _, _, s in self.results if s in (STATUS_OK, STATUS_MOVED))

    @property
    def skipped(self) -> int:
        return sum(1 for _, _, s in self.results if s.startswith(STATUS_SKIP))

    @property
    def failed(self) -> int:
        return sum(1 for _, _, s in self.results if s.startswith(STATUS_FAIL))

    @property
    def succeeded(self) -> bool:
        return self.failed == 0

    def __len__(self) -> int:
        return len(self.results)
