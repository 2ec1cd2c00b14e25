"""Development script to format, lint and test the autoloader package."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run one check step, exiting on the first failure."""
    print(f"\n--- {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\nFailed: {step_name}")
        sys.exit(1)


def main() -> None:
    """Run formatting (unless --ci), linting and the test suite."""
    parser = argparse.ArgumentParser(description="Run autoloader development checks.")
    parser.add_argument(
        "--ci",
        action="store_true",
        help="Only verify; do not rewrite files",
    )
    parser.add_argument(
        "pytest_args",
        nargs="*",
        help="Extra arguments passed to pytest",
    )
    args = parser.parse_args()

    if args.ci:
        run_command(["ruff", "format", "--check", "."], "Ruff Format Check")
        run_command(["ruff", "check", "."], "Ruff Lint")
    else:
        run_command(["ruff", "format", "."], "Ruff Formatting")
        run_command(["ruff", "check", "--fix", "."], "Ruff Linting & Fixes")

    run_command([sys.executable, "-m", "pytest", *args.pytest_args], "Tests")
    print("\nAll checks passed.")


if __name__ == "__main__":
    main()
