import subprocess
from pathlib import Path

import pytest

from rustdrill.cli import (
    ExerciseNotFound,
    build_parser,
    find_exercise,
    list_lines,
    main,
    rustc_exists,
)
from rustdrill.exercise import load_exercises

SUCCESS_TOML = """
[[exercises]]
name = "compSuccess"
path = "compSuccess.rs"
mode = "compile"
hint = ""

[[exercises]]
name = "testSuccess"
path = "testSuccess.rs"
mode = "test"
hint = ""
"""

FAILURE_TOML = """
[[exercises]]
name = "compFailure"
path = "compFailure.rs"
mode = "compile"
hint = ""

[[exercises]]
name = "compNoExercise"
path = "compNoExercise.rs"
mode = "compile"
hint = ""

[[exercises]]
name = "testFailure"
path = "testFailure.rs"
mode = "test"
hint = "Hello!"

[[exercises]]
name = "testNotPassed"
path = "testNotPassed.rs"
mode = "test"
hint = ""
"""

STATE_TOML = """
[[exercises]]
name = "pending_exercise"
path = "pending_exercise.rs"
mode = "compile"
hint = ""

[[exercises]]
name = "pending_test_exercise"
path = "pending_test_exercise.rs"
mode = "test"
hint = ""

[[exercises]]
name = "finished_exercise"
path = "finished_exercise.rs"
mode = "compile"
hint = ""
"""

FILES = {
    "success/info.toml": SUCCESS_TOML,
    "success/default_out.txt": "Thanks for installing the exercises!",
    "success/compSuccess.rs": "fn main() {\n}\n",
    "success/testSuccess.rs": (
        "#[test]\nfn passing() {\n    println!(\"THIS TEST TOO SHALL PASS\");\n"
        "    assert!(true);\n}\n"
    ),
    "failure/info.toml": FAILURE_TOML,
    "failure/compFailure.rs": "fn main() {\n    let\n}\n",
    "failure/compNoExercise.rs": "fn main() {\n}\n",
    "failure/testFailure.rs": "#[test]\nfn passing() {\n    asset!(true);\n}\n",
    "failure/testNotPassed.rs": "#[test]\nfn not_passing() {\n    assert!(false);\n}\n",
    "state/info.toml": STATE_TOML,
    "state/finished_exercise.rs": "// fake_exercise\n\nfn main() {\n\n}\n",
    "state/pending_exercise.rs": "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n",
    "state/pending_test_exercise.rs": "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n",
}


class FakeToolchain:
    """Stands in for rustc and the binaries it builds."""

    def __init__(self, broken=(), failing=(), outputs=None, has_rustc=True):
        self.broken = set(broken)
        self.failing = set(failing)
        self.outputs = outputs or {}
        self.has_rustc = has_rustc
        self.last_source = None

    def __call__(self, args, **kwargs):
        args = list(args)
        if args[0] == "rustc":
            if not self.has_rustc:
                raise FileNotFoundError(2, "No such file", "rustc")
            if "--version" in args:
                return subprocess.CompletedProcess(args, 0, b"", b"")
            self.last_source = next(Path(a).name for a in args if a.endswith(".rs"))
            if self.last_source in self.broken:
                return subprocess.CompletedProcess(args, 1, b"", b"error: expected pattern")
            return subprocess.CompletedProcess(args, 0, b"", b"")
        stdout = self.outputs.get(self.last_source, "").encode()
        code = 1 if self.last_source in self.failing else 0
        return subprocess.CompletedProcess(args, code, stdout, b"")


@pytest.fixture
def root(tmp_path):
    for name, text in FILES.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path


def use(monkeypatch, directory, toolchain=None):
    monkeypatch.chdir(directory)
    monkeypatch.setattr(subprocess, "run", toolchain or FakeToolchain())


FAILURES = FakeToolchain(
    broken={"compFailure.rs", "testFailure.rs"}, failing={"testNotPassed.rs"}
)


def test_runs_without_arguments(root, monkeypatch, capsys):
    use(monkeypatch, root / "success")
    assert main([]) == 0
    assert "Thanks for installing the exercises!" in capsys.readouterr().out


def test_fails_when_in_wrong_dir(root, monkeypatch, capsys):
    use(monkeypatch, root)
    assert main([]) == 1
    assert "must be run from the exercises directory" in capsys.readouterr().out


def test_fails_without_rustc(root, monkeypatch, capsys):
    use(monkeypatch, root / "success", FakeToolchain(has_rustc=False))
    assert main(["verify"]) == 1
    assert "We cannot find `rustc`." in capsys.readouterr().out


def test_version(root, monkeypatch, capsys):
    use(monkeypatch, root)
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == "v4.6.0\n"


def test_verify_all_success(root, monkeypatch):
    use(monkeypatch, root / "success")
    assert main(["verify"]) == 0


def test_verify_fails_if_some_fails(root, monkeypatch):
    use(monkeypatch, root / "failure", FAILURES)
    assert main(["verify"]) == 1


@pytest.mark.parametrize(
    "directory, name, code",
    [
        ("success", "compSuccess", 0),
        ("failure", "compFailure", 1),
        ("success", "testSuccess", 0),
        ("failure", "testFailure", 1),
        ("failure", "testNotPassed.rs", 1),
        ("failure", "compNoExercise.rs", 1),
    ],
)
def test_run_single(root, monkeypatch, directory, name, code):
    use(monkeypatch, root / directory, FAILURES)
    assert main(["run", name]) == code


def test_run_single_test_not_passed_by_name(root, monkeypatch):
    use(monkeypatch, root / "failure", FAILURES)
    assert main(["run", "testNotPassed"]) == 1


def test_run_unknown_name_reports(root, monkeypatch, capsys):
    use(monkeypatch, root / "failure", FAILURES)
    assert main(["run", "compNoExercise.rs"]) == 1
    assert "No exercise found for 'compNoExercise.rs'!" in capsys.readouterr().out


def test_run_single_test_no_filename(root, monkeypatch):
    use(monkeypatch, root)
    with pytest.raises(SystemExit) as exc:
        main(["run"])
    assert exc.value.code == 1


def test_get_hint_for_single_test(root, monkeypatch, capsys):
    use(monkeypatch, root / "failure", FAILURES)
    assert main(["hint", "testFailure"]) == 0
    assert capsys.readouterr().out == "Hello!\n"


@pytest.mark.parametrize("name", ["pending_exercise", "pending_test_exercise"])
def test_run_exercise_does_not_prompt(root, monkeypatch, capsys, name):
    use(monkeypatch, root / "state")
    assert main(["run", name]) == 0
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_single_test_success_with_output(root, monkeypatch, capsys):
    toolchain = FakeToolchain(outputs={"testSuccess.rs": "THIS TEST TOO SHALL PASS\n"})
    use(monkeypatch, root / "success", toolchain)
    assert main(["--nocapture", "run", "testSuccess"]) == 0
    assert "THIS TEST TOO SHALL PAS" in capsys.readouterr().out


def test_run_single_test_success_without_output(root, monkeypatch, capsys):
    toolchain = FakeToolchain(outputs={"testSuccess.rs": "THIS TEST TOO SHALL PASS\n"})
    use(monkeypatch, root / "success", toolchain)
    assert main(["run", "testSuccess"]) == 0
    assert "THIS TEST TOO SHALL PAS" not in capsys.readouterr().out


def test_list_no_pending(root, monkeypatch, capsys):
    use(monkeypatch, root / "success")
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Pending" not in out
    assert "compSuccess" in out


def test_list_both_done_and_pending(root, monkeypatch, capsys):
    use(monkeypatch, root / "state")
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Done" in out and "Pending" in out


def test_list_without_pending(root, monkeypatch, capsys):
    use(monkeypatch, root / "state")
    assert main(["list", "--solved"]) == 0
    assert "Pending" not in capsys.readouterr().out


def test_list_without_done(root, monkeypatch, capsys):
    use(monkeypatch, root / "state")
    assert main(["list", "--unsolved"]) == 0
    assert "Done" not in capsys.readouterr().out


def test_list_lines_names_and_progress(root):
    exercises = load_exercises(root / "state" / "info.toml")
    exercises = [
        type(e)(e.name, root / "state" / e.path, e.mode, e.hint) for e in exercises
    ]
    lines = list_lines(exercises, names=True)
    assert lines == [
        "pending_exercise",
        "pending_test_exercise",
        "finished_exercise",
        "Progress: You completed 1 / 3 exercises (33.33 %).",
    ]


def test_list_lines_filter_and_header(root, monkeypatch):
    monkeypatch.chdir(root / "state")
    exercises = load_exercises("info.toml")
    lines = list_lines(exercises, filter="TEST")
    assert lines[0].split("\t")[0].strip() == "Name"
    assert len(lines) == 3
    assert lines[1].startswith("pending_test_exercise")
    assert lines[1].rstrip().endswith("Pending")


def test_list_lines_empty_filter_shows_nothing(root, monkeypatch):
    monkeypatch.chdir(root / "state")
    exercises = load_exercises("info.toml")
    lines = list_lines(exercises, paths=True, filter="")
    assert len(lines) == 1
    assert lines[0].startswith("Progress:")


def test_list_paths_only(root, monkeypatch, capsys):
    use(monkeypatch, root / "success")
    assert main(["list", "-p"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == ["compSuccess.rs", "testSuccess.rs"]


def test_find_exercise(root, monkeypatch):
    monkeypatch.chdir(root / "state")
    exercises = load_exercises("info.toml")
    assert find_exercise("next", exercises).name == "pending_exercise"
    assert find_exercise("finished_exercise", exercises).name == "finished_exercise"
    with pytest.raises(ExerciseNotFound, match="No exercise found for 'missing'!"):
        find_exercise("missing", exercises)


def test_find_next_when_all_done(root, monkeypatch):
    monkeypatch.chdir(root / "success")
    exercises = load_exercises("info.toml")
    with pytest.raises(ExerciseNotFound, match="no more exercises"):
        find_exercise("next", exercises)


def test_watch_without_exercises_dir(root, monkeypatch, capsys):
    use(monkeypatch, root / "state")
    assert main(["watch"]) == 1
    assert "Could not watch your progress" in capsys.readouterr().out


def test_rustc_exists(monkeypatch):
    monkeypatch.setattr(subprocess, "run", FakeToolchain())
    assert rustc_exists() is True
    monkeypatch.setattr(subprocess, "run", FakeToolchain(has_rustc=False))
    assert rustc_exists() is False


def test_build_parser():
    args = build_parser().parse_args(["--nocapture", "run", "intro1"])
    assert args.nocapture is True
    assert args.command == "run"
    assert args.name == "intro1"
    listing = build_parser().parse_args(["list", "-f", "a,b", "-u"])
    assert listing.filter == "a,b"
    assert listing.unsolved is True
    assert listing.solved is False