"""Shared pytest configuration and fixtures for the screenlapse test suite."""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest
from loguru import logger

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from screenlapse.models.frame import Frame  # noqa: E402


# =============================================================================
# Logging
# =============================================================================

@pytest.fixture
def log_messages() -> List[str]:
    """Collect loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


# =============================================================================
# Capture trees
# =============================================================================

@pytest.fixture
def make_capture() -> Callable[[Path, bytes, float], Path]:
    """Create a file with the given content and modification time (epoch seconds)."""

    def _make(path: Path, content: bytes = b"png", mtime: float = 1_700_000_000.0) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        os.utime(path, (mtime, mtime))
        return path

    return _make


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    base = tmp_path / "screenshots"
    base.mkdir()
    return base


# =============================================================================
# In-memory sources and sinks
# =============================================================================

class MemoryFrameSource:
    """Serves frame bytes from a dict keyed by path; missing paths raise OSError."""

    def __init__(self, contents: Dict[Path, bytes]) -> None:
        self.contents = contents
        self.reads: List[Path] = []

    def read(self, frame: Frame) -> bytes:
        self.reads.append(frame.path)
        if frame.path not in self.contents:
            raise FileNotFoundError(2, "No such file or directory", str(frame.path))
        return self.contents[frame.path]


class BufferingSink:
    """Fake encoder input that records writes and close calls."""

    def __init__(self, fail_after: int | None = None, error: OSError | None = None) -> None:
        self.chunks: List[bytes] = []
        self.close_calls = 0
        self.fail_after = fail_after
        self.error = error or BrokenPipeError(32, "Broken pipe")

    def write(self, data: bytes) -> None:
        if self.close_calls:
            raise ValueError("write to closed sink")
        if self.fail_after is not None and len(self.chunks) >= self.fail_after:
            raise self.error
        self.chunks.append(data)

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture
def buffering_sink() -> BufferingSink:
    return BufferingSink()
