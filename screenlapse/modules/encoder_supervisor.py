# screenlapse/modules/encoder_supervisor.py

import subprocess
import tempfile
from pathlib import Path
from typing import IO, List, Optional

import imageio_ffmpeg as ffmpeg

from screenlapse.config import AppConfig, get_app_config, logger
from screenlapse.models.encoder_result import EncoderResult
from screenlapse.models.profile import Profile
from screenlapse.utils.exceptions import EncoderLaunchError, is_closed_pipe_error


def build_ffmpeg_command(executable: str, profile: Profile, framerate: str, output_dir: Path) -> List[str]:
    """
    Fixed image2pipe -> H.264 transcode. Concatenated images are read from stdin and
    the output file, named after the profile, is overwritten if it exists.
    """
    output_path = output_dir / profile.output_filename(AppConfig.VIDEO_EXTENSION)
    return [
        executable,
        "-f", "image2pipe",
        "-framerate", str(framerate),
        "-i", "-",
        "-s:v", f"{AppConfig.VIDEO_WIDTH}x{AppConfig.VIDEO_HEIGHT}",
        "-c:v", AppConfig.VIDEO_CODEC,
        "-vf", f"format={AppConfig.PIXEL_FORMAT}",
        "-r", str(AppConfig.VIDEO_FPS),
        "-movflags", "+faststart",
        "-y",
        str(output_path),
    ]


class EncoderSink:
    """Write end of the encoder's stdin. close() is safe to call more than once."""

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self.closed = False

    def write(self, data: bytes) -> None:
        self._stream.write(data)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self._stream.close()
        except OSError as e:
            if not is_closed_pipe_error(e):
                raise
            # Encoder already exited; its status and output are reported by wait().
            logger.debug("Encoder input closed after the encoder exited.")


class EncoderSession:
    def __init__(self, process: subprocess.Popen, output_buffer: IO[bytes], output_path: Optional[Path] = None) -> None:
        self.process = process
        self.output_path = output_path
        self.sink = EncoderSink(process.stdin)
        self._output_buffer = output_buffer
        self._result: Optional[EncoderResult] = None

    def close(self) -> None:
        self.sink.close()

    def wait(self) -> EncoderResult:
        if self._result is not None:
            return self._result

        # ffmpeg keeps waiting for frames until stdin hits end-of-stream.
        self.close()
        returncode = self.process.wait()
        self._result = EncoderResult(
            returncode=returncode,
            output=self._read_output(),
            output_path=self.output_path,
        )
        logger.debug(f"Encoder exited with status {returncode}")
        return self._result

    def _read_output(self) -> str:
        try:
            self._output_buffer.seek(0)
            return self._output_buffer.read().decode("utf-8", errors="replace")
        finally:
            self._output_buffer.close()

    def _handle_unexpected_exit(self) -> None:
        self.close()
        if self.process.poll() is None:
            self.process.terminate()
            self.process.wait()
        self._output_buffer.close()

    def __enter__(self) -> "EncoderSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None and self._result is None:
            self._handle_unexpected_exit()
        else:
            self.wait()


class EncoderSupervisor:
    def __init__(self, executable: Optional[str] = None, output_dir: Optional[Path] = None) -> None:
        cfg = get_app_config()
        self.executable: Optional[str] = executable or cfg.FFMPEG_EXE
        self.output_dir: Path = Path(output_dir or cfg.OUTPUT_DIR or Path.cwd())

    def resolve_executable(self) -> str:
        if self.executable:
            return self.executable
        try:
            return ffmpeg.get_ffmpeg_exe()
        except RuntimeError as e:
            raise EncoderLaunchError(f"Unable to locate ffmpeg: {e}") from e

    def output_path_for(self, profile: Profile) -> Path:
        return self.output_dir / profile.output_filename(AppConfig.VIDEO_EXTENSION)

    def build_command(self, profile: Profile, framerate: str) -> List[str]:
        return build_ffmpeg_command(self.resolve_executable(), profile, framerate, self.output_dir)

    def start(self, profile: Profile, framerate: str) -> EncoderSession:
        command = self.build_command(profile, framerate)
        return self.launch(command, output_path=self.output_path_for(profile))

    @staticmethod
    def launch(command: List[str], output_path: Optional[Path] = None) -> EncoderSession:
        # stdout and stderr share one temp file so the encoder never blocks on a full output pipe.
        output_buffer = tempfile.TemporaryFile()
        try:
            process = subprocess.Popen(
                command, stdin=subprocess.PIPE, stdout=output_buffer, stderr=subprocess.STDOUT
            )
        except OSError as e:
            output_buffer.close()
            raise EncoderLaunchError(f"Failed to start encoder '{command[0]}': {e}") from e

        logger.debug(f"Started encoder: {' '.join(command)}")
        return EncoderSession(process, output_buffer, output_path)
