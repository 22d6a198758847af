#!/usr/bin/env python3
"""
Development scripts for curia-container.

Each command shells out through uv; run ``python scripts.py <command>``.
"""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

PACKAGE_DIR = "src/curia/container/"


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return True if it exits cleanly."""
    print(f"\n🔄 {description}: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed with exit code {e.returncode}")
        return False
    except FileNotFoundError:
        print(f"❌ Command not found: {cmd[0]}")
        return False
    print(f"✅ {description} passed")
    return True


def _run_all(commands: list[tuple[list[str], str]]) -> int:
    results = [run_command(cmd, desc) for cmd, desc in commands]
    return 0 if all(results) else 1


def run_tests() -> int:
    return _run_all([(["uv", "run", "pytest", "-v"], "Tests")])


def run_lint() -> int:
    status = _run_all(
        [
            (["uv", "run", "ruff", "check", "."], "Ruff linting"),
            (["uv", "run", "ruff", "format", "--check", "."], "Ruff formatting"),
        ]
    )
    if status:
        print("\n💡 Try: uv run ruff format . && uv run ruff check --fix .")
    return status


def run_typecheck() -> int:
    return _run_all(
        [
            (["uv", "run", "mypy", PACKAGE_DIR], "MyPy type checking"),
            (["uv", "run", "pyright", PACKAGE_DIR], "Pyright type checking"),
        ]
    )


def run_demos() -> int:
    """Run every script under demo/ as a smoke test."""
    demo_files = sorted(path for path in Path("demo").glob("*.py") if not path.name.startswith("_"))
    if not demo_files:
        print("⚠️  No demo files found")
        return 0
    return _run_all([(["uv", "run", "python", str(path)], f"Demo: {path.name}") for path in demo_files])


def run_readme_validation() -> int:
    """Check that the code blocks in README.md run."""
    test_file = Path("test_readme.py")
    test_file.unlink(missing_ok=True)
    try:
        if not run_command(["uv", "run", "phmdoctest", "README.md", "--outfile", str(test_file)], "README extraction"):
            return 1
        return _run_all([(["uv", "run", "pytest", str(test_file), "-v"], "README code examples")])
    finally:
        test_file.unlink(missing_ok=True)


COMMANDS: dict[str, Callable[[], int]] = {
    "test": run_tests,
    "lint": run_lint,
    "typecheck": run_typecheck,
    "demos": run_demos,
    "readme": run_readme_validation,
}


def check_all() -> int:
    """Run every command and print a summary."""
    results = {name: command() == 0 for name, command in COMMANDS.items()}

    print(f"\n{'=' * 20} SUMMARY {'=' * 20}")
    for name, passed in results.items():
        print(f"{name:<15} {'✅ PASS' if passed else '❌ FAIL'}")
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    commands = {**COMMANDS, "check": check_all}
    if len(sys.argv) != 2 or sys.argv[1] not in commands:
        print(f"Usage: python scripts.py <{'|'.join(commands)}>")
        sys.exit(1)
    sys.exit(commands[sys.argv[1]]())
