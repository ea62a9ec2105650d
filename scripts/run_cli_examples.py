from __future__ import annotations

import re
import subprocess
import sys
from dataclasses import dataclass

BASE_ARGS = ["--frames", "3", "--delta-time", "0.05", "--window", "120"]
SUMMARY = re.compile(r"Last frame: (\d+)x(\d+), iterations: (\d+), sha256: ([0-9a-f]{64})")


@dataclass
class Example:
    name: str
    args: list[str]
    expected_iterations: int | None = None
    expected_size: tuple[int, int] | None = (120, 120)
    must_fail: bool = False

    def full_args(self) -> list[str]:
        return [sys.executable, "explore.py", *self.args]


EXAMPLES: list[Example] = [
    Example(name="defaults", args=[*BASE_ARGS], expected_iterations=50),
    Example(name="python-backend", args=[*BASE_ARGS, "--backend", "python", "--workers", "2"], expected_iterations=50),
    Example(name="pan", args=[*BASE_ARGS, "--hold", "right", "--hold", "up"], expected_iterations=50),
    Example(name="zoom-in", args=[*BASE_ARGS, "--hold", "zoom-in"], expected_iterations=50),
    Example(name="slow-zoom-in", args=["--frames", "3", "--delta-time", "1.5", "--window", "120", "--hold", "zoom-in"], expected_iterations=50),
    Example(name="zoom-out", args=[*BASE_ARGS, "--hold", "zoom_out", "--rate", "2"], expected_iterations=50),
    Example(name="more-iterations", args=[*BASE_ARGS, "--hold", "more-iterations"], expected_iterations=51),
    Example(name="fewer-iterations", args=[*BASE_ARGS, "--max-iterations", "0", "--hold", "fewer-iterations"], expected_iterations=0),
    Example(name="smooth", args=[*BASE_ARGS, "--smooth"], expected_iterations=50),
    Example(name="fallback-color", args=[*BASE_ARGS, "--max-iterations", "0", "--fallback-color", "#0a3ba0"], expected_iterations=0),
    Example(name="image-factor", args=["--frames", "1", "--image-factor", "20"], expected_iterations=50, expected_size=(60, 60)),
    Example(name="verbose", args=[*BASE_ARGS, "--verbose"], expected_iterations=50),
    Example(name="bad-size", args=[*BASE_ARGS, "--x-size", "0"], expected_size=None, must_fail=True),
    Example(name="bad-action", args=[*BASE_ARGS, "--hold", "jump"], expected_size=None, must_fail=True),
]


def _verify(example: Example, completed: subprocess.CompletedProcess) -> None:
    if example.must_fail:
        if completed.returncode == 0:
            raise RuntimeError(f"Example {example.name} was expected to fail")
        return
    if completed.returncode != 0:
        raise RuntimeError(f"Example {example.name} failed with {completed.returncode}:\n{completed.stderr}")
    match = SUMMARY.search(completed.stdout)
    if match is None:
        raise RuntimeError(f"Example {example.name} printed no frame summary")
    width, height, iterations = int(match.group(1)), int(match.group(2)), int(match.group(3))
    if example.expected_size is not None and (width, height) != example.expected_size:
        raise RuntimeError(f"Example {example.name} rendered {width}x{height}, expected {example.expected_size}")
    if example.expected_iterations is not None and iterations != example.expected_iterations:
        raise RuntimeError(f"Example {example.name} ended at {iterations} iterations, expected {example.expected_iterations}")


def main() -> None:
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        completed = subprocess.run(example.full_args(), capture_output=True, text=True)
        _verify(example, completed)
        print(completed.stdout.strip().splitlines()[-1] if completed.stdout.strip() else "(expected failure)")
    print("\nAll CLI examples ran successfully.")


if __name__ == "__main__":
    main()
