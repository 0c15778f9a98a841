# /screenlapse/utils/exceptions.py

import errno


class ScreenlapseError(Exception):
    """Base class for failures that end a timelapse run."""


class ProfileDiscoveryError(ScreenlapseError):
    pass


class NoProfilesError(ScreenlapseError):
    pass


class EncoderLaunchError(ScreenlapseError):
    pass


class EncoderFailedError(ScreenlapseError):
    def __init__(self, returncode: int, output: str) -> None:
        self.returncode = returncode
        self.output = output
        super().__init__(f"FFmpeg exited with status {returncode}:\n{output}")


def is_closed_pipe_error(error: OSError) -> bool:
    """True when a write failed because the reading process is gone (EINVAL on Windows, EPIPE elsewhere)."""
    return isinstance(error, BrokenPipeError) or error.errno in (errno.EPIPE, errno.EINVAL)
