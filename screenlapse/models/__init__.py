# /screenlapse/models/__init__.py

from .profile import Profile
from .frame import Frame

from .run_statistics import RunStatistics

from .encoder_result import EncoderResult
from .timelapse_result import TimelapseResult
