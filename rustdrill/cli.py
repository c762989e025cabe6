"""Command-line interface: list, run, verify, watch and hint."""

from __future__ import annotations

import argparse
import enum
import errno
import itertools
import os
import queue
import subprocess
import sys
import threading
import time
from collections.abc import Iterator, Sequence
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise, load_exercises
from .run import RunFailed, run
from .ui import emoji_enabled
from .verify import VerificationFailed, verify

VERSION = "4.6.0"
DEBOUNCE_SECONDS = 2.0
POLL_SECONDS = 1.0

_BANNER = "\n       welcome to...\n\n         rustdrill\n"

_FINISH_ART = """\
+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+--------------------------  ------------------------+
                          \\/                         
     ▒▒          ▒▒▒▒▒▒▒▒      ▒▒▒▒▒▒▒▒          ▒▒   
   ▒▒▒▒  ▒▒    ▒▒        ▒▒  ▒▒        ▒▒    ▒▒  ▒▒▒▒ 
   ▒▒▒▒  ▒▒  ▒▒            ▒▒            ▒▒  ▒▒  ▒▒▒▒ 
 ░░▒▒▒▒░░▒▒  ▒▒            ▒▒            ▒▒  ▒▒░░▒▒▒▒ 
   ▓▓▓▓▓▓▓▓  ▓▓      ▓▓██  ▓▓  ▓▓██      ▓▓  ▓▓▓▓▓▓▓▓ 
     ▒▒▒▒    ▒▒      ████  ▒▒  ████      ▒▒░░  ▒▒▒▒   
       ▒▒  ▒▒▒▒▒▒        ▒▒▒▒▒▒        ▒▒▒▒▒▒  ▒▒     
         ▒▒▒▒▒▒▒▒▒▒▓▓▓▓▓▓▒▒▒▒▒▒▒▒▓▓▒▒▓▓▒▒▒▒▒▒▒▒       
           ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒         
             ▒▒▒▒▒▒▒▒▒▒██▒▒▒▒▒▒██▒▒▒▒▒▒▒▒▒▒           
           ▒▒  ▒▒▒▒▒▒▒▒▒▒██████▒▒▒▒▒▒▒▒▒▒  ▒▒         
         ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒       
       ▒▒    ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒    ▒▒     
       ▒▒  ▒▒    ▒▒                  ▒▒    ▒▒  ▒▒     
           ▒▒  ▒▒                      ▒▒  ▒▒         
"""

_WATCH_HELP = """\
Commands available to you in watch mode:
  hint  - prints the current exercise's hint
  clear - clears the screen
  quit  - quits watch mode
  help  - displays this help message

Watch mode automatically re-evaluates the current exercise
when you edit a file's contents."""


class WatchStatus(enum.Enum):
    """How watch mode ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


class ExerciseNotFound(LookupError):
    """Raised when no exercise matches the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class _Parser(argparse.ArgumentParser):
    """An argument parser that exits with status 1 on bad usage."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """The parser for the command line."""
    parser = _Parser(
        prog="rustdrill",
        description="A collection of small exercises to get you used to writing and reading Rust code",
    )
    parser.add_argument("--nocapture", action="store_true",
                        help="show outputs from the test exercises")
    parser.add_argument("-v", "--version", action="store_true",
                        help="show the executable version")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("verify", help="verifies all exercises according to the recommended order")
    commands.add_parser("watch", help="reruns `verify` when files were edited")

    run_parser = commands.add_parser("run", help="runs/tests a single exercise")
    run_parser.add_argument("name", help="the name of the exercise")

    hint_parser = commands.add_parser("hint", help="returns a hint for the given exercise")
    hint_parser.add_argument("name", help="the name of the exercise")

    list_parser = commands.add_parser("list", help="lists the exercises available")
    list_parser.add_argument("-p", "--paths", action="store_true",
                             help="show only the paths of the exercises")
    list_parser.add_argument("-n", "--names", action="store_true",
                             help="show only the names of the exercises")
    list_parser.add_argument("-f", "--filter", default=None,
                             help="comma separated patterns to match exercise names")
    list_parser.add_argument("-u", "--unsolved", action="store_true",
                             help="display only exercises not yet solved")
    list_parser.add_argument("-s", "--solved", action="store_true",
                             help="display only exercises that have been solved")
    return parser


def rustc_exists() -> bool:
    """Whether `rustc --version` can be run successfully."""
    try:
        completed = subprocess.run(["rustc", "--version"], stdout=subprocess.DEVNULL)
    except OSError:
        return False
    return completed.returncode == 0


def find_exercise(name: str, exercises: Sequence[Exercise]) -> Exercise:
    """The exercise with this name, or the first pending one for "next"."""
    if name == "next":
        found = next((e for e in exercises if not e.looks_done()), None)
        if found is None:
            raise ExerciseNotFound(
                "🎉 Congratulations! You have done all the exercises!\n"
                "🔚 There are no more exercises to do next!"
            )
        return found
    found = next((e for e in exercises if e.name == name), None)
    if found is None:
        raise ExerciseNotFound(f"No exercise found for '{name}'!")
    return found


def _row(name: str, path: str, status: str) -> str:
    return f"{name:<17}\t{path:<46}\t{status:<7}"


def list_lines(
    exercises: Sequence[Exercise],
    paths: bool = False,
    names: bool = False,
    filter: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
) -> list[str]:
    """The lines printed by the list command, ending with the progress line."""
    lines = []
    if not paths and not names:
        lines.append(_row("Name", "Path", "Status"))
    patterns = [p for p in (filter or "").lower().split(",") if p.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        done = exercise.looks_done()
        done_count += done
        matches = any(p in exercise.name or p in fname for p in patterns)
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches or filter is None):
            if paths:
                lines.append(fname)
            elif names:
                lines.append(exercise.name)
            else:
                lines.append(_row(exercise.name, fname, "Done" if done else "Pending"))
    total = len(exercises)
    percentage = done_count / total * 100 if total else float("nan")
    lines.append(
        f"Progress: You completed {done_count} / {total} exercises ({percentage:.2f} %)."
    )
    return lines


def _clear_screen() -> None:
    print("\x1bc")


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, changes: queue.Queue[Path]) -> None:
        super().__init__()
        self._changes = changes

    def _put(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._changes.put(Path(os.fsdecode(event.src_path)))

    def on_created(self, event: FileSystemEvent) -> None:
        self._put(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._put(event)


class _WatchState:
    def __init__(self, hint: str) -> None:
        self._hint = hint
        self._lock = threading.Lock()
        self.should_quit = threading.Event()

    @property
    def hint(self) -> str:
        with self._lock:
            return self._hint

    @hint.setter
    def hint(self, value: str) -> None:
        with self._lock:
            self._hint = value


def _shell_loop(state: _WatchState) -> None:
    while True:
        try:
            raw = sys.stdin.readline()
        except (OSError, ValueError) as err:
            print(f"error reading command: {err}")
            return
        if not raw:
            return
        command = raw.strip()
        if command == "hint":
            print(state.hint)
        elif command == "clear":
            print("\x1b[2J\x1b[1;1H")
        elif command == "quit":
            state.should_quit.set()
            print("Bye!")
        elif command == "help":
            print(_WATCH_HELP)
        else:
            print(f"unknown command: {command}")


def _spawn_watch_shell(state: _WatchState) -> None:
    print("Welcome to watch mode! You can type 'help' to get an overview "
          "of the commands you can use here.")
    threading.Thread(target=_shell_loop, args=(state,), daemon=True).start()


def _debounced(changes: queue.Queue[Path], first: Path) -> list[Path]:
    pending = {first: None}
    deadline = time.monotonic() + DEBOUNCE_SECONDS
    while (remaining := deadline - time.monotonic()) > 0:
        try:
            path = changes.get(timeout=remaining)
        except queue.Empty:
            break
        pending.pop(path, None)
        pending[path] = None
    return list(pending)


def _path_ends_with(path: Path, suffix: Path) -> bool:
    parts = suffix.parts
    return len(parts) <= len(path.parts) and path.parts[len(path.parts) - len(parts):] == parts


def _pending_after(path: Path, exercises: Sequence[Exercise]) -> Iterator[Exercise]:
    filepath = path.resolve()
    current = itertools.dropwhile(lambda e: not _path_ends_with(filepath, e.path), exercises)
    others = (
        e for e in exercises
        if not e.looks_done() and not _path_ends_with(filepath, e.path)
    )
    return itertools.chain(current, others)


def watch(exercises: Sequence[Exercise], verbose: bool) -> WatchStatus:
    """Verify the exercises, then re-verify whenever a file under exercises/ changes."""
    exercises_dir = Path("exercises")
    if not exercises_dir.is_dir():
        raise FileNotFoundError(errno.ENOENT, "No such directory", str(exercises_dir))
    changes: queue.Queue[Path] = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(changes), str(exercises_dir), recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, verbose)
            return WatchStatus.FINISHED
        except VerificationFailed as err:
            state = _WatchState(err.exercise.hint)
        _spawn_watch_shell(state)
        while True:
            try:
                first = changes.get(timeout=POLL_SECONDS)
            except queue.Empty:
                pass
            else:
                for path in _debounced(changes, first):
                    if path.suffix != ".rs" or not path.exists():
                        continue
                    _clear_screen()
                    try:
                        verify(_pending_after(path, exercises), verbose)
                        return WatchStatus.FINISHED
                    except VerificationFailed as err:
                        state.hint = err.exercise.hint
            if state.should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()


def _list_command(exercises: Sequence[Exercise], args: argparse.Namespace) -> int:
    try:
        for line in list_lines(exercises, args.paths, args.names, args.filter,
                               args.unsolved, args.solved):
            print(line)
        sys.stdout.flush()
    except BrokenPipeError:
        return 0
    except OSError:
        return 1
    return 0


def _watch_command(exercises: Sequence[Exercise], verbose: bool) -> int:
    try:
        status = watch(exercises, verbose)
    except OSError as err:
        print(f"Error: Could not watch your progress. Error message was {err!r}.")
        print("Most likely you've run out of disk space or your 'inotify limit' has been reached.")
        return 1
    if status is WatchStatus.FINISHED:
        emoji = "🎉" if emoji_enabled() else "★"
        print(f"{emoji} All exercises completed! {emoji}")
        print()
        print(_FINISH_ART)
        print("We hope you enjoyed learning about the various aspects of Rust!")
        print("If you noticed any issues, please don't hesitate to report them.")
        print("You can also contribute your own exercises to help the greater community!")
        print()
        print("Before reporting an issue or contributing, please read the contributing guidelines.")
    else:
        print("We hope you're enjoying learning about Rust!")
        print("If you want to continue working on the exercises at a later point, "
              "you can simply run `rustdrill watch` again")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"v{VERSION}")
        return 0

    if args.command is None:
        print(_BANNER)

    if not Path("info.toml").exists():
        print(f"{sys.argv[0]} must be run from the exercises directory")
        print("Try `cd` into the directory that holds info.toml!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    exercises = load_exercises("info.toml")
    verbose = args.nocapture

    if args.command is None:
        print(Path("default_out.txt").read_text(encoding="utf-8"))
        return 0

    if args.command == "list":
        return _list_command(exercises, args)

    if args.command in ("run", "hint"):
        try:
            exercise = find_exercise(args.name, exercises)
        except ExerciseNotFound as err:
            print(err)
            return 1
        if args.command == "hint":
            print(exercise.hint)
            return 0
        try:
            run(exercise, verbose)
        except RunFailed:
            return 1
        return 0

    if args.command == "verify":
        try:
            verify(exercises, verbose)
        except VerificationFailed:
            return 1
        return 0

    return _watch_command(exercises, verbose)


if __name__ == "__main__":
    raise SystemExit(main())