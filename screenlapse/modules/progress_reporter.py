# screenlapse/modules/progress_reporter.py

import sys
import time
from typing import List, Optional

from tqdm import tqdm

from screenlapse.config import logger
from screenlapse.models.frame import Frame
from screenlapse.models.run_statistics import RunStatistics
from screenlapse.utils.misc import format_bytes, format_elapsed


class ProgressReporter:
    def __init__(self, enabled: bool = True) -> None:
        self.enabled: bool = enabled
        self.advanced: int = 0
        self._bar: Optional[tqdm] = None
        self._started_at: Optional[float] = None

    def announce(self, frames: List[Frame]) -> None:
        total_size = sum(frame.size for frame in frames)
        logger.info(f"Found {len(frames)} screenshots. Total size: {format_bytes(total_size)}")

    def start(self, total: int) -> None:
        self.advanced = 0
        self._started_at = time.monotonic()
        if self.enabled:
            self._bar = tqdm(total=total, desc="Encoding", unit="frame", file=sys.stderr)

    def advance(self) -> None:
        self.advanced += 1
        if self._bar is not None:
            self._bar.update(1)

    def finish(self, statistics: RunStatistics) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
        if self._started_at is not None:
            statistics.elapsed_s = time.monotonic() - self._started_at
            self._started_at = None

    def summarize(self, statistics: RunStatistics) -> None:
        """Closing summary, logged once the encoder has exited successfully."""
        if statistics.skipped_count > 0:
            logger.warning(f"Skipped {statistics.skipped_count} screenshots. See output for info")
        logger.info(f"Finished in {format_elapsed(statistics.elapsed_s)}")
