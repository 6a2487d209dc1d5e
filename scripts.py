import subprocess
import sys

SOURCES = ["src/gitsparse", "tests"]


def run_tests():
    subprocess.run(["pytest", "tests"], check=True)


def run_doctests():
    subprocess.run(["pytest", "src/gitsparse"], check=True)


def run_lint():
    subprocess.run(["flake8", "--max-line-length", "120", *SOURCES], check=True)


def run_typecheck():
    subprocess.run(["mypy", "src/gitsparse"], check=True)


def run_format():
    subprocess.run(["black", *SOURCES], check=True)


def run_coverage():
    subprocess.run(["pytest", "--cov=gitsparse", "--cov-report=term-missing", "--cov-report=xml"], check=True)


def run_all():
    for step in (run_lint, run_typecheck, run_coverage):
        step()


if __name__ == "__main__":
    globals()[sys.argv[1]]()
