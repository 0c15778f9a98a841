# screenlapse/modules/timelapse_pipeline.py

from typing import Optional

from screenlapse.config import logger
from screenlapse.models.profile import Profile
from screenlapse.models.run_statistics import RunStatistics
from screenlapse.models.timelapse_result import TimelapseResult
from screenlapse.modules.catalog_scanner import CatalogScanner
from screenlapse.modules.encoder_supervisor import EncoderSupervisor
from screenlapse.modules.frame_streamer import FrameSource, FrameStreamer
from screenlapse.modules.progress_reporter import ProgressReporter
from screenlapse.modules.temporal_sorter import sort_frames


class TimelapsePipeline:
    def __init__(self,
                 supervisor: EncoderSupervisor,
                 scanner: Optional[CatalogScanner] = None,
                 source: Optional[FrameSource] = None,
                 reporter: Optional[ProgressReporter] = None) -> None:
        self.supervisor = supervisor
        self.scanner = scanner or CatalogScanner()
        self.reporter = reporter or ProgressReporter()
        self.streamer = FrameStreamer(source=source, reporter=self.reporter)

    def run(self, profile: Profile, framerate: str) -> TimelapseResult:
        """
        Scan, sort and stream one profile's screenshots into the encoder.

        Raises EncoderLaunchError if ffmpeg cannot be started. A non-zero ffmpeg exit
        is reported on the returned result; call result.encoder.raise_for_status()
        to turn it into an EncoderFailedError.
        """
        frames = sort_frames(self.scanner.scan(profile.path))
        statistics = RunStatistics.for_frames(frames)
        self.reporter.announce(frames)

        session = self.supervisor.start(profile, framerate)
        with session:
            self.reporter.start(len(frames))
            try:
                self.streamer.stream(frames, session.sink, statistics)
            finally:
                self.reporter.finish(statistics)
            encoder_result = session.wait()

        if encoder_result.success:
            logger.info(f"Wrote {statistics.written_count} frames to {session.output_path}")
            self.reporter.summarize(statistics)
        else:
            logger.debug(f"Encoder failed for profile {profile.name}")

        return TimelapseResult(
            profile=profile,
            output_path=session.output_path,
            statistics=statistics,
            encoder=encoder_result,
        )
