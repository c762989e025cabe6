"""Running a single exercise without prompting."""

from __future__ import annotations

from .exercise import CompilationFailed, Exercise, Mode
from .ui import _Spinner, success, warn
from .verify import VerificationFailed, test


class RunFailed(Exception):
    """Raised when an exercise fails to compile, run or pass its tests."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"running {exercise} failed")
        self.exercise = exercise


def run(exercise: Exercise, verbose: bool) -> None:
    """Compile and run one exercise, or run its tests."""
    if exercise.mode is Mode.TEST:
        try:
            test(exercise, verbose)
        except VerificationFailed as err:
            raise RunFailed(exercise) from err
    else:
        compile_and_run(exercise)


def compile_and_run(exercise: Exercise) -> None:
    """Compile the exercise and run the binary, showing its output."""
    with _Spinner(f"Compiling {exercise}...") as spinner:
        try:
            compiled = exercise.compile()
        except CompilationFailed as err:
            spinner.finish_and_clear()
            warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
            print(err.output.stderr)
            raise RunFailed(exercise) from err
        with compiled:
            spinner.message = f"Running {exercise}..."
            output = compiled.run()

    if output.success:
        print(output.stdout)
        success(f"Successfully ran {exercise}")
        return
    print(output.stdout)
    print(output.stderr)
    warn(f"Ran {exercise} with errors")
    raise RunFailed(exercise)