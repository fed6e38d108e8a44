#!/usr/bin/env python
"""
Simple Test Runner for DazzleStructLib
======================================

Usage:
    python run_tests.py           # Run the whole suite
    python run_tests.py --cov     # Also report coverage for the package
"""

import subprocess
import sys
import argparse
from pathlib import Path


def run_tests(coverage=False):
    """Run the test suite."""
    cmd = [
        sys.executable, "-m", "pytest",
        "tests",
        "--tb=short",               # Short traceback format
        "--durations=10",           # Show 10 slowest tests
        "-v"                        # Verbose output
    ]

    if coverage:
        cmd.extend(["--cov=dazzlestructlib", "--cov-report=term-missing"])

    print("Running DazzleStructLib tests...")
    print("=" * 60)

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode


def main():
    parser = argparse.ArgumentParser(description="Test runner for DazzleStructLib")
    parser.add_argument("--cov", action="store_true", help="Report coverage (needs pytest-cov)")

    args = parser.parse_args()
    return run_tests(coverage=args.cov)


if __name__ == "__main__":
    sys.exit(main())
