"""End-to-end pipeline tests with a stand-in encoder that copies stdin to the output file."""

import sys
from pathlib import Path
from typing import List

import pytest

from screenlapse.models.profile import Profile
from screenlapse.modules.encoder_supervisor import EncoderSupervisor
from screenlapse.modules.progress_reporter import ProgressReporter
from screenlapse.modules.timelapse_pipeline import TimelapsePipeline
from screenlapse.utils.exceptions import EncoderFailedError, EncoderLaunchError

COPY_TO_OUTPUT = (
    "import sys\n"
    "data = sys.stdin.buffer.read()\n"
    "open(sys.argv[1], 'wb').write(data)\n"
    "print('wrote', len(data))\n"
)

REJECT_INPUT = (
    "import sys\n"
    "sys.stdin.buffer.read()\n"
    "print('Output #0, mp4, to p1.mp4')\n"
    "sys.stderr.write('Could not find codec parameters\\n')\n"
    "sys.exit(69)\n"
)


class StandInSupervisor(EncoderSupervisor):
    def __init__(self, script: str, output_dir: Path) -> None:
        super().__init__(executable="ffmpeg", output_dir=output_dir)
        self.script = script
        self.framerates: List[str] = []

    def build_command(self, profile: Profile, framerate: str) -> List[str]:
        self.framerates.append(framerate)
        return [sys.executable, "-c", self.script, str(self.output_path_for(profile))]


@pytest.fixture
def out_dir(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    return out


def make_pipeline(script: str, out_dir: Path, **kwargs) -> TimelapsePipeline:
    return TimelapsePipeline(
        supervisor=StandInSupervisor(script, out_dir),
        reporter=ProgressReporter(enabled=False),
        **kwargs,
    )


def test_frames_are_encoded_in_capture_order(base_dir, make_capture, out_dir):
    root = base_dir / "p1"
    make_capture(root / "a.png", b"T2", 1_700_000_002)
    make_capture(root / "b.png", b"T1", 1_700_000_001)
    make_capture(root / "c.png", b"T3", 1_700_000_003)

    result = make_pipeline(COPY_TO_OUTPUT, out_dir).run(Profile.from_directory(root), "5")

    assert result.success
    assert result.output_path == out_dir / "p1.mp4"
    assert (out_dir / "p1.mp4").read_bytes() == b"T1T2T3"
    assert result.statistics.written_count == 3
    assert result.statistics.skipped_count == 0
    assert result.statistics.frame_count == 3
    assert result.statistics.total_bytes == 6


def test_framerate_is_passed_to_the_encoder(base_dir, make_capture, out_dir):
    make_capture(base_dir / "p1" / "a.png")
    pipeline = make_pipeline(COPY_TO_OUTPUT, out_dir)

    pipeline.run(Profile.from_directory(base_dir / "p1"), "12")

    assert pipeline.supervisor.framerates == ["12"]


def test_empty_profile_still_runs_encoder_to_completion(base_dir, out_dir):
    (base_dir / "empty").mkdir()

    result = make_pipeline(COPY_TO_OUTPUT, out_dir).run(Profile.from_directory(base_dir / "empty"), "5")

    assert result.success
    assert result.statistics.frame_count == 0
    assert result.statistics.total_bytes == 0
    assert result.statistics.skipped_count == 0
    assert (out_dir / "empty.mp4").read_bytes() == b""


def test_unreadable_frames_are_skipped_in_order(base_dir, make_capture, out_dir, monkeypatch):
    root = base_dir / "p1"
    for i in range(5):
        make_capture(root / f"{i}.png", f"[{i}]".encode(), 1_700_000_000 + i)

    real_read_bytes = Path.read_bytes

    def flaky_read_bytes(self):
        if self.name in ("1.png", "3.png"):
            raise PermissionError(13, "Permission denied", str(self))
        return real_read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", flaky_read_bytes)

    result = make_pipeline(COPY_TO_OUTPUT, out_dir).run(Profile.from_directory(root), "5")

    assert result.success
    assert result.statistics.skipped_count == 2
    assert result.statistics.written_count == 3
    monkeypatch.setattr(Path, "read_bytes", real_read_bytes)
    assert (out_dir / "p1.mp4").read_bytes() == b"[0][2][4]"


def test_encoder_failure_surfaces_combined_output(base_dir, make_capture, out_dir):
    make_capture(base_dir / "p1" / "a.png")

    result = make_pipeline(REJECT_INPUT, out_dir).run(Profile.from_directory(base_dir / "p1"), "5")

    assert not result.success
    assert result.encoder.returncode == 69
    assert "Output #0, mp4, to p1.mp4" in result.encoder.output
    assert "Could not find codec parameters" in result.encoder.output
    with pytest.raises(EncoderFailedError) as excinfo:
        result.encoder.raise_for_status()
    assert result.encoder.output in str(excinfo.value)


def test_launch_failure_is_fatal(base_dir, make_capture, out_dir):
    make_capture(base_dir / "p1" / "a.png")
    pipeline = TimelapsePipeline(
        supervisor=EncoderSupervisor(executable=str(out_dir / "missing-ffmpeg"), output_dir=out_dir),
        reporter=ProgressReporter(enabled=False),
    )

    with pytest.raises(EncoderLaunchError):
        pipeline.run(Profile.from_directory(base_dir / "p1"), "5")


def test_summary_is_logged_only_after_successful_encode(base_dir, make_capture, out_dir, log_messages):
    make_capture(base_dir / "p1" / "a.png")

    make_pipeline(COPY_TO_OUTPUT, out_dir).run(Profile.from_directory(base_dir / "p1"), "5")

    assert any(m.startswith("Finished in ") for m in log_messages)


def test_no_summary_when_encoder_fails(base_dir, make_capture, out_dir, log_messages):
    make_capture(base_dir / "p1" / "a.png")

    result = make_pipeline(REJECT_INPUT, out_dir).run(Profile.from_directory(base_dir / "p1"), "5")

    assert not result.success
    assert not any(m.startswith("Finished in ") for m in log_messages)
