# /screenlapse/models/profile.py

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    path: Path

    @classmethod
    def from_directory(cls, directory: Path) -> "Profile":
        return cls(name=directory.name, path=directory)

    def output_filename(self, extension: str) -> str:
        return f"{self.name}{extension}"
