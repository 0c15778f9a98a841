# screenlapse/modules/catalog_scanner.py

import os
import stat
from pathlib import Path
from typing import List

from screenlapse.config import logger
from screenlapse.models.frame import Frame
from screenlapse.models.profile import Profile
from screenlapse.utils.exceptions import ProfileDiscoveryError


def discover_profiles(base_dir: Path) -> List[Profile]:
    """
    List one profile per subdirectory of the screenshot base directory, sorted by name.
    """
    try:
        entries = sorted(base_dir.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise ProfileDiscoveryError(f"Failed to open screenshots folder {base_dir}: {e}") from e

    profiles = [Profile.from_directory(entry) for entry in entries if entry.is_dir()]
    logger.debug(f"Found {len(profiles)} profiles in {base_dir}")
    return profiles


class CatalogScanner:
    def __init__(self, extension: str = ".png") -> None:
        self.extension: str = extension
        self.errors: int = 0

    def scan(self, root: Path) -> List[Frame]:
        """
        Collect a Frame for every regular file below root whose name ends with the
        configured extension. Only metadata is read. Unreadable entries are logged
        and skipped.
        """
        self.errors = 0
        frames: List[Frame] = []

        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            # Name order keeps discovery order stable across platforms.
            dirnames.sort()
            for filename in sorted(filenames):
                if not filename.endswith(self.extension):
                    continue
                path = Path(dirpath) / filename
                frame = self._stat_frame(path)
                if frame is not None:
                    frames.append(frame)

        logger.debug(f"Scanned {root}: {len(frames)} frames, {self.errors} unreadable entries")
        return frames

    def _stat_frame(self, path: Path) -> Frame | None:
        try:
            st = os.stat(path)
        except OSError as e:
            self.errors += 1
            logger.warning(f"Failed to read '{path}', skipping. Error: {e}")
            return None
        if not stat.S_ISREG(st.st_mode):
            return None
        return Frame.from_stat(path, st)

    def _on_walk_error(self, error: OSError) -> None:
        self.errors += 1
        logger.warning(f"Failed to read '{error.filename}', skipping. Error: {error}")


def scan_frames(root: Path, extension: str = ".png") -> List[Frame]:
    return CatalogScanner(extension=extension).scan(root)
