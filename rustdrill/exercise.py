"""Exercises: loading, compiling, running and checking their state."""

from __future__ import annotations

import enum
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .ui import emoji_enabled

RUSTC_COLOR_ARGS = ("--color", "always")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"


def temp_file() -> str:
    """A temporary file name unique to this process and thread."""
    return f"./temp_{os.getpid()}_{threading.get_ident()}"


def clean() -> None:
    """Remove the temporary binary, if there is one."""
    try:
        os.remove(temp_file())
    except OSError:
        pass


class Mode(enum.Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass
class ExerciseOutput:
    """Captured output of a finished process."""

    stdout: str
    stderr: str
    success: bool = True


class CompilationFailed(Exception):
    """Raised when an exercise does not compile."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__("compilation failed")
        self.output = output


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _to_output(completed: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
        success=completed.returncode == 0,
    )


def _execute(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(list(args), capture_output=True)


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class CompiledExercise:
    """A compiled exercise; closing it removes the temporary binary."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise
        self._closed = False

    def run(self) -> ExerciseOutput:
        return self.exercise.run()

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            clean()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class Exercise:
    """One exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def __str__(self) -> str:
        return str(self.path)

    def _clippy_compile(self) -> subprocess.CompletedProcess:
        cargo_toml = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2018"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        error_message = (
            "Failed to write 📎 Clippy 📎 Cargo.toml file."
            if emoji_enabled()
            else "Failed to write Clippy Cargo.toml file."
        )
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(cargo_toml, encoding="utf-8")
        except OSError as err:
            raise RuntimeError(error_message) from err
        # An executable is built too, so that the exercise can be run afterwards.
        _execute("rustc", str(self.path), "-o", temp_file(), *RUSTC_COLOR_ARGS)
        # A clean build is needed for clippy to report every lint.
        _execute("cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS)
        return _execute(
            "cargo", "clippy", "--manifest-path", CLIPPY_CARGO_TOML_PATH,
            *RUSTC_COLOR_ARGS, "--", "-D", "warnings", "-D", "clippy::float_cmp",
        )

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompilationFailed if that fails."""
        if self.mode is Mode.COMPILE:
            completed = _execute("rustc", str(self.path), "-o", temp_file(), *RUSTC_COLOR_ARGS)
        elif self.mode is Mode.TEST:
            completed = _execute(
                "rustc", "--test", str(self.path), "-o", temp_file(), *RUSTC_COLOR_ARGS
            )
        else:
            completed = self._clippy_compile()
        if completed.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise CompilationFailed(_to_output(completed))

    def run(self) -> ExerciseOutput:
        """Run the compiled binary and capture what it printed."""
        args = [temp_file()]
        if self.mode is Mode.TEST:
            args.append("--show-output")
        return _to_output(subprocess.run(args, capture_output=True))

    def state(self) -> list[ContextLine]:
        """Lines around the pending marker; an empty list when done."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return []
        lines = _lines(source)
        matched = next(
            (index for index, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)),
            None,
        )
        if matched is None:
            raise RuntimeError(f"pending marker in {self.path} spans several lines")
        low = max(matched - CONTEXT, 0)
        return [
            ContextLine(line=line, number=index + 1, important=index == matched)
            for index, line in enumerate(lines[low : matched + CONTEXT + 1], start=low)
        ]

    def looks_done(self) -> bool:
        """Whether the pending marker has been removed from the file."""
        return not self.state()


def parse_exercises(text: str) -> list[Exercise]:
    """Build the exercise list from the text of an info.toml file."""
    data = tomllib.loads(text)
    return [
        Exercise(
            name=entry["name"],
            path=Path(entry["path"]),
            mode=Mode(entry["mode"]),
            hint=entry["hint"],
        )
        for entry in data["exercises"]
    ]


def load_exercises(path: str | os.PathLike) -> list[Exercise]:
    """Read and parse an info.toml file."""
    return parse_exercises(Path(path).read_text(encoding="utf-8"))