"""Checking exercises in order and prompting when they are not yet done."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from .exercise import CompilationFailed, CompiledExercise, Exercise, Mode
from .ui import _Spinner, blue, bold, emoji_enabled, success, warn


class VerificationFailed(Exception):
    """Raised when an exercise fails or is not yet marked as done."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"exercise {exercise} is not finished")
        self.exercise = exercise


class RunMode(enum.Enum):
    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non-interactive"


def verify(exercises: Iterable[Exercise], verbose: bool) -> None:
    """Check each exercise in turn; raise VerificationFailed at the first one not done."""
    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            done = compile_and_test(exercise, RunMode.INTERACTIVE, verbose)
        elif exercise.mode is Mode.COMPILE:
            done = _compile_and_run_interactively(exercise)
        else:
            done = _compile_only(exercise)
        if not done:
            raise VerificationFailed(exercise)


def test(exercise: Exercise, verbose: bool) -> None:
    """Compile and run the exercise's tests without prompting."""
    compile_and_test(exercise, RunMode.NON_INTERACTIVE, verbose)


def _compile(exercise: Exercise, spinner: _Spinner) -> CompiledExercise:
    try:
        return exercise.compile()
    except CompilationFailed as err:
        spinner.finish_and_clear()
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(err.output.stderr)
        raise VerificationFailed(exercise) from err


def _compile_only(exercise: Exercise) -> bool:
    with _Spinner(f"Compiling {exercise}...") as spinner:
        _compile(exercise, spinner).close()
    success(f"Successfully compiled {exercise}!")
    return prompt_for_completion(exercise, None)


def _compile_and_run_interactively(exercise: Exercise) -> bool:
    with _Spinner(f"Compiling {exercise}...") as spinner:
        with _compile(exercise, spinner) as compiled:
            spinner.message = f"Running {exercise}..."
            output = compiled.run()
    if not output.success:
        warn(f"Ran {exercise} with errors")
        print(output.stdout)
        print(output.stderr)
        raise VerificationFailed(exercise)
    success(f"Successfully ran {exercise}!")
    return prompt_for_completion(exercise, output.stdout)


def compile_and_test(exercise: Exercise, run_mode: RunMode, verbose: bool) -> bool:
    """Compile the exercise as a test harness and run it."""
    with _Spinner(f"Testing {exercise}...") as spinner:
        with _compile(exercise, spinner) as compiled:
            output = compiled.run()
    if not output.success:
        warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
        print(output.stdout)
        raise VerificationFailed(exercise)
    if verbose:
        print(output.stdout)
    success(f"Successfully tested {exercise}")
    if run_mode is RunMode.INTERACTIVE:
        return prompt_for_completion(exercise, None)
    return True


def prompt_for_completion(exercise: Exercise, prompt_output: str | None) -> bool:
    """Return True if the exercise is done; otherwise show where the marker is."""
    context = exercise.state()
    if not context:
        return True

    no_emoji = not emoji_enabled()
    clippy_message = (
        "The code is compiling, and Clippy is happy!"
        if no_emoji
        else "The code is compiling, and 📎 Clippy 📎 is happy!"
    )
    success_message = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_message,
    }[exercise.mode]

    print()
    if no_emoji:
        print(f"~*~ {success_message} ~*~")
    else:
        print(f"🎉 🎉  {success_message} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        print(separator())
        print(prompt_output)
        print(separator())
        print()

    print("You can keep working on this exercise,")
    print(f"or jump into the next one by removing the {bold('`I AM NOT DONE`')} comment:")
    print()
    for context_line in context:
        line = bold(context_line.line) if context_line.important else context_line.line
        number = f"{context_line.number:>2}"
        print(f"{blue(bold(number))} {blue('|')}  {line}")
    return False


def separator() -> str:
    return bold("====================")