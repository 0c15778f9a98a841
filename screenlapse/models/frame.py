# /screenlapse/models/frame.py

import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, conint


class Frame(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: Path
    captured_at: datetime
    size: conint(ge=0)

    @classmethod
    def from_stat(cls, path: Path, stat_result: os.stat_result) -> "Frame":
        """Build a frame from filesystem metadata; capture time is the modification time."""
        return cls(
            path=path,
            captured_at=datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc),
            size=stat_result.st_size,
        )
