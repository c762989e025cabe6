# rustdrill

`rustdrill` walks you through a directory of small exercises, one at a time.
It compiles each exercise with `rustc`, runs it or its tests, and tells you
what to fix next. An exercise counts as finished once it builds, its checks
pass, and you have removed the `I AM NOT DONE` marker comment from it.

## Requirements

- Python 3.11 or later
- `rustc` on your `PATH` (and `cargo` for exercises in `clippy` mode)
- the `watchdog` library, installed automatically, for watch mode

## Installation

```console
pip install .
```

To run the test suite as well:

```console
pip install ".[test]"
pytest
```

## The exercise directory

`rustdrill` must be started from a directory that contains an `info.toml`
file. Each entry in it describes one exercise:

```toml
[[exercises]]
name = "variables1"
path = "exercises/variables/variables1.rs"
mode = "compile"
hint = """
Declare the variable with `let`."""
```

`mode` is one of:

- `compile` – build the file as a program and run it
- `test` – build the file as a test harness and run its tests
- `clippy` – write `exercises/clippy/Cargo.toml`, build the file, and require
  `cargo clippy` to report no warnings

Compiled binaries are written to a temporary file in the current directory and
removed again once they have run.

Started without a subcommand, `rustdrill` prints a welcome banner followed by
the contents of `default_out.txt` from the same directory.

## Commands

```console
rustdrill verify           # work through every exercise in order, stop at the first unfinished one
rustdrill watch            # like verify, then re-check whenever a file under ./exercises changes
rustdrill run NAME         # build and run (or test) a single exercise
rustdrill run next         # run the first exercise that is not finished yet
rustdrill hint NAME        # print the hint for an exercise
rustdrill list             # table of all exercises with their status and overall progress
rustdrill --version        # print the version
```

Add `--nocapture` before the subcommand to see the output of test exercises:

```console
rustdrill --nocapture run NAME
```

### Listing exercises

```console
rustdrill list --paths          # only the file paths (-p)
rustdrill list --names          # only the names (-n)
rustdrill list --filter a,b     # only exercises whose name or path contains a or b (-f)
rustdrill list --unsolved       # only unfinished exercises (-u)
rustdrill list --solved         # only finished exercises (-s)
```

The last line always reports how many exercises are done, for example
`Progress: You completed 12 / 80 exercises (15.00 %).`

### Watch mode

`rustdrill watch` first verifies all exercises. If one is unfinished, it keeps
watching `./exercises` and, after a `.rs` file is created or changed, checks
that exercise and then every other unfinished one. While it runs you can type:

| command | effect                                  |
|---------|-----------------------------------------|
| `hint`  | print the hint of the current exercise  |
| `clear` | clear the screen                        |
| `quit`  | leave watch mode                        |
| `help`  | show this list                          |

## Exit status

Commands exit with `0` on success and `1` when an exercise fails to build,
fails its checks, is not yet marked as done, cannot be found, when the command
line is invalid, when `rustc` cannot be run, or when `rustdrill` is not started
from a directory holding `info.toml`.

## Output

Messages are coloured when standard output is a terminal; set `CLICOLOR=0` to
turn colours off or `CLICOLOR_FORCE=1` to force them on. Set the environment
variable `NO_EMOJI` to replace the emoji in messages with plain characters.

## Using it from Python

The building blocks are importable:

- `rustdrill.exercise` – `Exercise`, `Mode`, `load_exercises`,
  `parse_exercises`; `Exercise.compile()` raises `CompilationFailed`, and
  `Exercise.state()` returns the lines around the marker (empty when done)
- `rustdrill.verify` – `verify(exercises, verbose)`, raising
  `VerificationFailed` at the first unfinished exercise
- `rustdrill.run` – `run(exercise, verbose)`, raising `RunFailed`
- `rustdrill.cli` – `main(argv)`, `find_exercise`, `list_lines`, `watch`

```python
from rustdrill.exercise import load_exercises
from rustdrill.cli import list_lines

for line in list_lines(load_exercises("info.toml"), unsolved=True):
    print(line)
```

## Worked solutions

The `rustdrill.lessons` package holds worked, tested solutions for topics the
exercises cover: `basics`, `branching`, `strings`, `structs`, `enums`,
`ownership`, `scoping`, `containers`, `cons_list`, `generics`, `traits`,
`iterators`, `errors`, `advanced_errors`, `threads`, `clippy` and `quizzes`.

```python
from rustdrill.lessons.errors import parse_pos_nonzero
from rustdrill.lessons.iterators import divide
from rustdrill.lessons.advanced_errors import parse_climate

parse_pos_nonzero("42")           # PositiveNonzeroInteger(value=42)
divide(81, 9)                     # 9
parse_climate("Munich,2015,23.1") # Climate(city='Munich', year=2015, temp=...)
```

Not every topic has a worked solution here: there are none for variables or
for type conversions.