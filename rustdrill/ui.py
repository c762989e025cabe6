"""Terminal styling, status messages and a progress spinner."""

from __future__ import annotations

import itertools
import os
import sys
import threading

_RESET = "\x1b[0m"


def _colors_enabled() -> bool:
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    if os.environ.get("CLICOLOR") == "0":
        return False
    return sys.stdout.isatty()


def _style(code: str, text: object) -> str:
    if not _colors_enabled():
        return str(text)
    return f"\x1b[{code}m{text}{_RESET}"


def emoji_enabled() -> bool:
    """Emoji are shown unless the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" not in os.environ


def bold(text: object) -> str:
    return _style("1", text)


def red(text: object) -> str:
    return _style("31", text)


def green(text: object) -> str:
    return _style("32", text)


def blue(text: object) -> str:
    return _style("34", text)


def warn(message: str) -> None:
    """Print a warning line in red."""
    symbol = "⚠️ " if emoji_enabled() else "!"
    print(f"{red(symbol)} {red(message)}")


def success(message: str) -> None:
    """Print a success line in green."""
    symbol = "✅" if emoji_enabled() else "✓"
    print(f"{green(symbol)} {green(message)}")


class _Spinner:
    """A spinner on stderr that animates only when stderr is a terminal."""

    _FRAMES = "⠁⠂⠄⡀⢀⠠⠐⠈"

    def __init__(self, message: str) -> None:
        self.message = message
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        if sys.stderr.isatty():
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()

    def _spin(self) -> None:
        for frame in itertools.cycle(self._FRAMES):
            if self._stop.wait(0.1):
                break
            sys.stderr.write(f"\r\x1b[2K{frame} {self.message}")
            sys.stderr.flush()

    def finish_and_clear(self) -> None:
        if self._stop.is_set():
            return
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            sys.stderr.write("\r\x1b[2K")
            sys.stderr.flush()

    def __enter__(self) -> _Spinner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.finish_and_clear()