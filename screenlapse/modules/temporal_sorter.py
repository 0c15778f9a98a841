# screenlapse/modules/temporal_sorter.py

from typing import Iterable, List

from screenlapse.models.frame import Frame


def sort_frames(frames: Iterable[Frame]) -> List[Frame]:
    """Order frames by capture time. sorted() is stable, so equal timestamps keep discovery order."""
    return sorted(frames, key=lambda frame: frame.captured_at)
