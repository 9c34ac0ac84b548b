"""
Video player launcher
Starts VLC at the timestamp of a subtitle match
"""

import logging
import os
import platform
import subprocess
import threading
from concurrent.futures import Future
from typing import Callable, Dict, List, Optional

from searchvid.exceptions import PlayerError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

PLAYER_PATHS: Dict[str, List[str]] = {
    "Darwin": [
        "/Applications/VLC.app/Contents/MacOS/VLC",
        "/opt/homebrew/bin/vlc",
        "/usr/local/bin/vlc",
        "/usr/bin/vlc",
    ],
    "Windows": [
        "C:\\Program Files\\VideoLAN\\VLC\\vlc.exe",
        "C:\\Program Files (x86)\\VideoLAN\\VLC\\vlc.exe",
    ],
    "Linux": ["/usr/bin/vlc", "/usr/local/bin/vlc", "/snap/bin/vlc"],
}

INSTALL_HINT = "Please install VLC media player from https://www.videolan.org/"


def find_player_path(system: str, configured_path: Optional[str] = None) -> str:
    """
    Locate the VLC executable

    Args:
        system: Operating system name as returned by platform.system()
        configured_path: Explicit player path from configuration, if any

    Returns:
        Full path of a known install location, or the bare executable name
        so the system PATH is used
    """
    if configured_path:
        return configured_path

    for candidate in PLAYER_PATHS.get(system, []):
        if os.path.exists(candidate):
            return candidate

    return "vlc.exe" if system == "Windows" else "vlc"


def build_player_command(player_path: str, video_path: str, start_time_ms: int) -> List[str]:
    """Command line that plays video_path from the start time and exits VLC afterwards"""
    start_seconds = start_time_ms // 1000
    return [player_path, "--play-and-exit", "--start-time", str(start_seconds), video_path]


class PlayerLauncher:
    """Launches the external player without blocking the interface"""

    def __init__(
        self,
        configured_path: Optional[str] = None,
        system: Optional[str] = None,
        report: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            configured_path: Player executable that overrides the lookup
            system: Operating system name, defaults to platform.system()
            report: Receives user facing error messages
        """
        self.configured_path = configured_path
        self.system = system or platform.system()
        self.report = report or logger.error

    def play(self, video_path: str, start_time_ms: int) -> "Future[int]":
        """
        Start playback of video_path at start_time_ms

        The returned future resolves to the player's exit code once it
        exits. Launch failures are reported and set on the future instead
        of being raised.

        Raises:
            UnsupportedPlatformError: the operating system is not supported
        """
        if self.system not in PLAYER_PATHS:
            raise UnsupportedPlatformError(self.system)

        player_path = find_player_path(self.system, self.configured_path)
        command = build_player_command(player_path, video_path, start_time_ms)
        future: "Future[int]" = Future()
        future.set_running_or_notify_cancel()

        logger.info("Launching player: %s", " ".join(command))
        try:
            player_process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError as error:
            self.report("VLC is not installed or not found in the system path. %s" % INSTALL_HINT)
            future.set_exception(PlayerError(str(error)))
            return future
        except OSError as error:
            self.report("Error launching video player: %s" % error)
            future.set_exception(PlayerError(str(error)))
            return future

        waiter = threading.Thread(
            target=self._wait_for_exit,
            args=(player_process, future),
            name="player-wait",
            daemon=True,
        )
        waiter.start()
        return future

    def _wait_for_exit(self, player_process: subprocess.Popen, future: "Future[int]") -> None:
        return_code = player_process.wait()
        if return_code != 0:
            self.report("VLC exited with code %d" % return_code)
        else:
            logger.debug("Player exited normally")
        future.set_result(return_code)
