#!/usr/bin/env python3
"""
Build script for Movie Manager.

Runs the lint, type-check and test steps, then builds the distribution.
"""

import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parent.parent

ARTIFACTS = [
    "build",
    "dist",
    "src/movie_manager.egg-info",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
]


def run_command(command: List[str], cwd: Optional[Path] = ROOT) -> int:
    """Run a command and return its exit code."""
    print(f"Running: {' '.join(command)}")
    result = subprocess.run(command, cwd=cwd)
    return result.returncode


def check() -> int:
    """Lint, type-check and test. Stops at the first failing step."""
    steps = [
        ("Linting", ["ruff", "check", "src/", "tests/"]),
        ("Type checking", ["mypy", "src/"]),
        ("Tests", ["pytest", "tests/"]),
    ]
    for name, command in steps:
        print(f"\n{name}...")
        if run_command(command) != 0:
            print(f"{name} failed")
            return 1
    return 0


def build_package() -> int:
    """Run all checks and build the sdist and wheel."""
    if check() != 0:
        return 1

    print("\nBuilding package...")
    if run_command([sys.executable, "-m", "build"]) != 0:
        print("Package build failed")
        return 1

    print("\nBuild completed successfully!")
    return 0


def clean() -> int:
    """Remove build and cache directories."""
    for name in ARTIFACTS:
        path = ROOT / name
        if path.exists():
            shutil.rmtree(path)
            print(f"Removed {path}")
    for cache in ROOT.rglob("__pycache__"):
        shutil.rmtree(cache, ignore_errors=True)
    return 0


def main() -> None:
    """Main entry point."""
    commands = {
        "build": build_package,
        "check": check,
        "clean": clean,
        "test": lambda: run_command(["pytest", "tests/"]),
        "lint": lambda: run_command(["ruff", "check", "--fix", "src/", "tests/"]),
    }

    if len(sys.argv) < 2 or sys.argv[1] not in commands:
        print(f"Usage: python scripts/build.py [{'|'.join(commands)}]")
        sys.exit(1)

    sys.exit(commands[sys.argv[1]]())


if __name__ == "__main__":
    main()
