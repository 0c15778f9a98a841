# screenlapse/modules/frame_streamer.py

from typing import List, Optional, Protocol

from screenlapse.config import logger
from screenlapse.models.frame import Frame
from screenlapse.models.run_statistics import RunStatistics
from screenlapse.modules.progress_reporter import ProgressReporter
from screenlapse.utils.exceptions import is_closed_pipe_error


class FrameSource(Protocol):
    def read(self, frame: Frame) -> bytes: ...


class FrameSink(Protocol):
    def write(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class FileFrameSource:
    """Reads each frame's file fully into memory."""

    def read(self, frame: Frame) -> bytes:
        return frame.path.read_bytes()


class FrameStreamer:
    def __init__(self, source: Optional[FrameSource] = None, reporter: Optional[ProgressReporter] = None) -> None:
        self.source: FrameSource = source or FileFrameSource()
        self.reporter: Optional[ProgressReporter] = reporter

    def stream(self, frames: List[Frame], sink: FrameSink, statistics: RunStatistics) -> RunStatistics:
        """
        Write every frame to the sink in order, one at a time. Unreadable frames are
        counted and skipped. The sink is always closed exactly once on return, which
        signals end-of-stream to the encoder.
        """
        try:
            for frame in frames:
                try:
                    data = self.source.read(frame)
                except OSError as e:
                    statistics.record_skipped(frame)
                    logger.warning(f"Failed to read '{frame.path}', skipping. Error: {e}")
                    self._advance()
                    continue

                try:
                    sink.write(data)
                except OSError as e:
                    if not is_closed_pipe_error(e):
                        raise
                    self._advance()
                    logger.error(f"Encoder stopped accepting input at '{frame.path}'. Aborting stream.")
                    break

                statistics.record_written(len(data))
                self._advance()
        finally:
            sink.close()

        return statistics

    def _advance(self) -> None:
        if self.reporter is not None:
            self.reporter.advance()
