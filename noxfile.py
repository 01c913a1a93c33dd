"""Nox sessions for sshhub.

    nox                    # lint, type_check and tests
    nox -s tests-3.12 -- -k menu
    nox -s lint -- --fix
"""

from __future__ import annotations

import shutil
from pathlib import Path

import nox

nox.options.default_venv_backend = "uv"
nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = ["lint", "type_check", "tests"]

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]
PYTHON_DEFAULT = "3.11"
PYTHON_PATHS = ["src", "tests", "noxfile.py"]

ARTIFACTS = ["build", "dist", "htmlcov", ".coverage", ".pytest_cache", ".mypy_cache", ".ruff_cache"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run pytest with coverage; extra arguments go to pytest."""
    session.install("-e", ".[test]")
    session.run("pytest", "--cov=sshhub", "--cov-report=term-missing", *session.posargs)


@nox.session(python=PYTHON_DEFAULT)
def lint(session: nox.Session) -> None:
    """Run ruff; pass --fix to apply safe fixes."""
    session.install("ruff")
    session.run("ruff", "check", *PYTHON_PATHS, *session.posargs)


@nox.session(python=PYTHON_DEFAULT)
def type_check(session: nox.Session) -> None:
    """Run mypy over the package."""
    session.install("mypy", "types-PyYAML")
    session.install("-e", ".")
    session.run("mypy", "src/sshhub", *session.posargs)


@nox.session(python=PYTHON_DEFAULT)
def build(session: nox.Session) -> None:
    """Build the wheel and sdist into dist/."""
    session.install("build")
    shutil.rmtree("dist", ignore_errors=True)
    session.run("python", "-m", "build")


@nox.session(python=False)
def clean(session: nox.Session) -> None:
    """Remove build artifacts and caches."""
    for name in ARTIFACTS:
        path = Path(name)
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
        else:
            continue
        session.log(f"Removed {path}")

    for pycache in Path("src").rglob("__pycache__"):
        shutil.rmtree(pycache)
