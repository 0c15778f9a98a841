# /screenlapse/models/run_statistics.py

from typing import List

from pydantic import BaseModel, Field

from screenlapse.models.frame import Frame


class RunStatistics(BaseModel):
    frame_count: int = 0
    total_bytes: int = 0
    written_count: int = 0
    written_bytes: int = 0
    skipped_count: int = 0
    elapsed_s: float = 0.0
    skipped_paths: List[str] = Field(default_factory=list)

    @classmethod
    def for_frames(cls, frames: List[Frame]) -> "RunStatistics":
        return cls(frame_count=len(frames), total_bytes=sum(frame.size for frame in frames))

    def record_written(self, nbytes: int) -> None:
        self.written_count += 1
        self.written_bytes += nbytes

    def record_skipped(self, frame: Frame) -> None:
        self.skipped_count += 1
        self.skipped_paths.append(str(frame.path))
