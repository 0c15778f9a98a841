# screenlapse/main.py

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from screenlapse.config import configure_logging, get_app_config, logger
from screenlapse.models.profile import Profile
from screenlapse.modules.catalog_scanner import CatalogScanner, discover_profiles
from screenlapse.modules.encoder_supervisor import EncoderSupervisor
from screenlapse.modules.progress_reporter import ProgressReporter
from screenlapse.modules.timelapse_pipeline import TimelapsePipeline
from screenlapse.utils.exceptions import NoProfilesError, ScreenlapseError
from screenlapse.utils.misc import parse_framerate
from screenlapse.utils.prompts import choose_profile, list_profiles, prompt_framerate, wait_for_key


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="screenlapse", description="Turn a profile's screenshots into a timelapse video with ffmpeg.")
    p.add_argument('--base-dir', type=Path, default=None, help='Folder containing one subfolder per profile')
    p.add_argument('--profile', default=None, help='Profile name to timelapse (skips the menu)')
    p.add_argument('--framerate', default=None, help='Input framerate, e.g. 5 or 30000/1001 (skips the prompt)')
    p.add_argument('--output-dir', type=Path, default=None, help='Where to write <profile>.mp4 (default: current directory)')
    p.add_argument('--no-progress', action='store_true', help='Disable the progress bar')
    p.add_argument('--no-pause', action='store_true', help='Exit without waiting for enter')
    p.add_argument('--log-level', default=None, help='Loguru level, e.g. DEBUG')
    return p.parse_args(argv)


def select_profile(profiles: List[Profile], name: Optional[str]) -> Profile:
    if name is None:
        list_profiles(profiles)
        return choose_profile(profiles)

    for profile in profiles:
        if profile.name == name:
            return profile
    raise NoProfilesError(f"No profile named '{name}'. Available: {', '.join(p.name for p in profiles)}")


def run(args: argparse.Namespace) -> int:
    cfg = get_app_config()

    try:
        base_dir = args.base_dir or cfg.resolve_base_dir()
    except RuntimeError as e:
        # Path.home() fails when no home directory can be determined.
        logger.error(f"Failed to find user home directory: {e}")
        return 1

    framerate = args.framerate
    if framerate is not None:
        framerate = framerate.strip()
        try:
            parse_framerate(framerate)
        except ValueError as e:
            logger.error(str(e))
            return 2

    try:
        profiles = discover_profiles(base_dir)
        if not profiles:
            raise NoProfilesError(f"No profiles found in {base_dir}")

        profile = select_profile(profiles, args.profile)
        if framerate is None:
            framerate = prompt_framerate(cfg.DEFAULT_FRAMERATE)

        pipeline = TimelapsePipeline(
            supervisor=EncoderSupervisor(output_dir=args.output_dir),
            scanner=CatalogScanner(extension=cfg.IMAGE_EXTENSION),
            reporter=ProgressReporter(enabled=not args.no_progress),
        )
        result = pipeline.run(profile, framerate)
        result.encoder.raise_for_status()
    except ScreenlapseError as e:
        logger.error(str(e))
        return 1
    except EOFError:
        logger.error("Input closed before a choice was made.")
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    cfg = get_app_config()
    configure_logging(args.log_level or cfg.LOG_LEVEL)

    try:
        code = run(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130

    if cfg.PAUSE_ON_EXIT and not args.no_pause:
        wait_for_key()
    return code


if __name__ == "__main__":
    sys.exit(main())
