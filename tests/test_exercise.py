import os
import subprocess
from pathlib import Path

import pytest

from rustdrill.exercise import (
    CLIPPY_CARGO_TOML_PATH,
    CompilationFailed,
    ContextLine,
    Exercise,
    Mode,
    load_exercises,
    parse_exercises,
    temp_file,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"
TEST_SUCCESS = '#[test]\nfn passing() {\n    println!("THIS TEST TOO SHALL PASS");\n    assert!(true);\n}\n'


class FakeToolchain:
    def __init__(self, compile_code=0, run_stdout=b"", compile_stderr=b""):
        self.compile_code = compile_code
        self.run_stdout = run_stdout
        self.compile_stderr = compile_stderr
        self.calls = []

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append(args)
        if args[0] in ("rustc", "cargo"):
            return subprocess.CompletedProcess(args, self.compile_code, b"", self.compile_stderr)
        return subprocess.CompletedProcess(args, 0, self.run_stdout, b"")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def make(directory, name, mode, body):
    path = directory / f"{name}.rs"
    path.write_text(body)
    return Exercise(name=name, path=path, mode=mode, hint="")


def test_clean(workdir, monkeypatch):
    monkeypatch.setattr(subprocess, "run", FakeToolchain())
    Path(temp_file()).touch()
    exercise = make(workdir, "example", Mode.COMPILE, PENDING)
    compiled = exercise.compile()
    compiled.close()
    assert not Path(temp_file()).exists()


def test_context_manager_cleans(workdir, monkeypatch):
    monkeypatch.setattr(subprocess, "run", FakeToolchain())
    exercise = make(workdir, "example", Mode.COMPILE, PENDING)
    with exercise.compile():
        Path(temp_file()).touch()
    assert not Path(temp_file()).exists()


def test_pending_state(workdir):
    exercise = make(workdir, "pending_exercise", Mode.COMPILE, PENDING)
    expected = [
        ContextLine(line="// fake_exercise", number=1, important=False),
        ContextLine(line="", number=2, important=False),
        ContextLine(line="// I AM NOT DONE", number=3, important=True),
        ContextLine(line="", number=4, important=False),
        ContextLine(line="fn main() {", number=5, important=False),
    ]
    assert exercise.state() == expected
    assert exercise.looks_done() is False


def test_finished_exercise(workdir):
    exercise = make(workdir, "finished_exercise", Mode.COMPILE, FINISHED)
    assert exercise.state() == []
    assert exercise.looks_done() is True


def test_marker_on_first_line_has_no_negative_context(workdir):
    exercise = make(workdir, "pending_test_exercise", Mode.TEST,
                    "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n")
    state = exercise.state()
    assert [line.number for line in state] == [1, 2, 3]
    assert state[0].important is True


def test_exercise_with_output(workdir, monkeypatch):
    fake = FakeToolchain(run_stdout=b"THIS TEST TOO SHALL PASS\n")
    monkeypatch.setattr(subprocess, "run", fake)
    exercise = make(workdir, "exercise_with_output", Mode.TEST, TEST_SUCCESS)
    with exercise.compile() as compiled:
        out = compiled.run()
    assert "THIS TEST TOO SHALL PASS" in out.stdout
    assert out.success is True
    assert fake.calls[0][:2] == ["rustc", "--test"]
    assert fake.calls[1] == [temp_file(), "--show-output"]


def test_compile_mode_command(workdir, monkeypatch):
    fake = FakeToolchain()
    monkeypatch.setattr(subprocess, "run", fake)
    exercise = make(workdir, "comp", Mode.COMPILE, FINISHED)
    exercise.compile().close()
    assert fake.calls == [["rustc", str(exercise.path), "-o", temp_file(), "--color", "always"]]


def test_compile_failure_raises_with_stderr(workdir, monkeypatch):
    monkeypatch.setattr(subprocess, "run", FakeToolchain(compile_code=1, compile_stderr=b"boom"))
    Path(temp_file()).touch()
    exercise = make(workdir, "compFailure", Mode.COMPILE, "fn main() {\n    let\n}\n")
    with pytest.raises(CompilationFailed) as info:
        exercise.compile()
    assert info.value.output.stderr == "boom"
    assert info.value.output.success is False
    assert not Path(temp_file()).exists()


def test_clippy_writes_manifest(workdir, monkeypatch):
    fake = FakeToolchain()
    monkeypatch.setattr(subprocess, "run", fake)
    (workdir / "exercises" / "clippy").mkdir(parents=True)
    exercise = make(workdir, "clippy1", Mode.CLIPPY, FINISHED)
    exercise.compile().close()
    manifest = Path(CLIPPY_CARGO_TOML_PATH).read_text()
    assert 'name = "clippy1"' in manifest
    assert 'path = "clippy1.rs"' in manifest
    assert [call[:2] for call in fake.calls] == [
        ["rustc", str(exercise.path)], ["cargo", "clean"], ["cargo", "clippy"]]
    assert fake.calls[-1][-4:] == ["-D", "warnings", "-D", "clippy::float_cmp"]


def test_clippy_without_directory_fails(workdir, monkeypatch):
    monkeypatch.setattr(subprocess, "run", FakeToolchain())
    exercise = make(workdir, "clippy1", Mode.CLIPPY, FINISHED)
    with pytest.raises(RuntimeError):
        exercise.compile()


def test_display_is_path(workdir):
    exercise = make(workdir, "x", Mode.COMPILE, FINISHED)
    assert str(exercise) == str(workdir / "x.rs")


def test_temp_file_is_unique_per_process():
    assert str(os.getpid()) in temp_file()
    assert temp_file() == temp_file()


INFO = """
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"
hint = "Hello!"

[[exercises]]
name = "tests1"
path = "exercises/tests/tests1.rs"
mode = "test"
hint = ""
"""


def test_parse_exercises():
    exercises = parse_exercises(INFO)
    assert [e.name for e in exercises] == ["intro1", "tests1"]
    assert [e.mode for e in exercises] == [Mode.COMPILE, Mode.TEST]
    assert exercises[0].path == Path("exercises/intro/intro1.rs")
    assert exercises[0].hint == "Hello!"


def test_load_exercises(tmp_path):
    info = tmp_path / "info.toml"
    info.write_text(INFO)
    assert load_exercises(info) == parse_exercises(INFO)


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        parse_exercises('[[exercises]]\nname="a"\npath="a.rs"\nmode="fly"\nhint=""\n')