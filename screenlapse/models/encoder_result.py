# /screenlapse/models/encoder_result.py

from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from screenlapse.utils.exceptions import EncoderFailedError


class EncoderResult(BaseModel):
    returncode: int
    output: str = ""
    output_path: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def raise_for_status(self) -> None:
        if not self.success:
            raise EncoderFailedError(self.returncode, self.output)
