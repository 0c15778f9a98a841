# /screenlapse/models/timelapse_result.py

from pathlib import Path

from pydantic import BaseModel

from screenlapse.models.encoder_result import EncoderResult
from screenlapse.models.profile import Profile
from screenlapse.models.run_statistics import RunStatistics


class TimelapseResult(BaseModel):
    profile: Profile
    output_path: Path
    statistics: RunStatistics
    encoder: EncoderResult

    @property
    def success(self) -> bool:
        return self.encoder.success
