from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
SCRIPT = Path(__file__).resolve().parent.parent / "mandel.py"
BASE_BOUNDS = "320x240"
BASE_UPPER_LEFT = "-2.5,1.2"
BASE_LOWER_RIGHT = "1.0,-1.2"


@dataclass
class Example:
    name: str
    output: Path
    args: list[str]
    options: list[str] | None = None

    def cli_args(self) -> list[str]:
        return [str(self.output), *self.args, *(self.options or [])]

    def full_args(self) -> list[str]:
        return [sys.executable, str(SCRIPT), *self.cli_args()]


def _base(name: str, filename: str, options: list[str] | None = None) -> Example:
    return Example(
        name=name,
        output=EXAMPLES_ROOT / name / filename,
        args=[BASE_BOUNDS, BASE_UPPER_LEFT, BASE_LOWER_RIGHT],
        options=options,
    )


EXAMPLES: list[Example] = [
    _base("default", "full-set.png"),
    Example(
        name="seahorse-valley",
        output=EXAMPLES_ROOT / "seahorse-valley" / "seahorse.png",
        args=["400x300", "-0.80,0.20", "-0.70,0.125"],
    ),
    Example(
        name="book-example",
        output=EXAMPLES_ROOT / "book-example" / "mandel.png",
        args=["1000x750", "-1.20,0.35", "-1,0.20"],
    ),
    _base("workers", "single-worker.png", ["--workers", "1"]),
    _base("iterations", "shallow.png", ["--iterations", "32"]),
    _base("format", "custom.bmp", ["--format", "bmp"]),
    _base("verbose", "diagnostic.png", ["--verbose"]),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _prepare(example: Example) -> None:
    _ensure_clean([example.output.parent])
    example.output.parent.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    if not example.output.is_file():
        raise RuntimeError(f"Expected file {example.output} was not created")
    if example.output.stat().st_size == 0:
        raise RuntimeError(f"File {example.output} is empty")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
