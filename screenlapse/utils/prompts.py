# screenlapse/utils/prompts.py

import sys
from typing import List, Optional, TextIO

from screenlapse.models.profile import Profile
from screenlapse.utils.misc import parse_framerate


def prompt(message: str, stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> str:
    """Write a prompt to stderr and return the next stdin line, stripped. EOF raises EOFError."""
    stdin = stdin or sys.stdin
    stderr = stderr or sys.stderr
    stderr.write(message)
    stderr.flush()
    line = stdin.readline()
    if line == "":
        raise EOFError("No input available.")
    return line.strip()


def list_profiles(profiles: List[Profile], stderr: Optional[TextIO] = None) -> None:
    stderr = stderr or sys.stderr
    stderr.write("Found the following profiles:\n")
    width = len(str(len(profiles)))
    for i, profile in enumerate(profiles, start=1):
        stderr.write(f"  {i:>{width}}  {profile.name}\n")
    stderr.flush()


def choose_profile(profiles: List[Profile], stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> Profile:
    stderr = stderr or sys.stderr
    while True:
        answer = prompt(
            "Type the number corresponding to the profile you want to timelapse.\n: ", stdin, stderr
        )
        try:
            choice = int(answer)
        except ValueError:
            choice = 0

        if 1 <= choice <= len(profiles):
            return profiles[choice - 1]
        stderr.write(f"Please input a number between 1 and {len(profiles)}!\n")


def prompt_framerate(default: str = "5", stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> str:
    stderr = stderr or sys.stderr
    while True:
        answer = prompt(f"Specify a framerate. Leave empty for a default of {default}.\n> ", stdin, stderr)
        if answer == "":
            return default
        try:
            parse_framerate(answer)
        except ValueError as e:
            stderr.write(f"{e}\n")
            continue
        return answer


def wait_for_key(stdin: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
    # Keeps the console open when launched by double-click.
    try:
        prompt("Press enter to continue...", stdin, stderr)
    except EOFError:
        pass
