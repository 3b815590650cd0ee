# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

# pylint: disable=invalid-name

"""Run tests for the credential_encoders package."""

import shutil
import subprocess  # nosemgrep # nosec
import sys
from pathlib import Path

HERE = Path(__file__).parent
ROOT_DIR = HERE.parent.resolve()


def ensure_test_requirements() -> None:
    """Ensure the test requirements are installed."""
    subprocess.run(  # nosemgrep # nosec
        [sys.executable, "-m", "pip", "install", "-e", ".[test]"],
        check=True,
        cwd=ROOT_DIR,
    )


def run_pytest() -> None:
    """Run pytest."""
    coverage_dir = ROOT_DIR / "coverage"
    if coverage_dir.exists():
        shutil.rmtree(coverage_dir)
    coverage_dir.mkdir(parents=True, exist_ok=True)
    n = "0" if sys.platform == "win32" else "auto"
    args = [
        sys.executable,
        "-m",
        "pytest",
        "-c",
        "pyproject.toml",
        "-n",
        f"{n}",
        "--cov=credential_encoders",
        "--cov-branch",
        "--cov-report=term-missing:skip-covered",
        "--cov-report",
        "html:coverage/html",
        "--cov-report",
        "xml:coverage/coverage.xml",
        "--junitxml=coverage/xunit.xml",
        "tests",
    ]
    print("Running pytest...\n")
    print(" ".join(args) + "\n")
    subprocess.run(  # nosemgrep # nosec
        args,
        check=True,
        cwd=ROOT_DIR,
    )


def main() -> None:
    """Run the tests."""
    if "--install" in sys.argv:
        ensure_test_requirements()
    run_pytest()


if __name__ == "__main__":
    main()
