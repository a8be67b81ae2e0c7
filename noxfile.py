from __future__ import annotations

from pathlib import Path
import platform
import sys
from typing import TYPE_CHECKING

import nox

if TYPE_CHECKING:
    from nox.sessions import Session

nox.options.default_venv_backend = "uv"
nox.options.reuse_existing_virtualenvs = True

PYTHON_VERSIONS = ["3.12", "3.13"]
COVER_MIN = 90


def constraints(session: Session) -> Path:
    """Return the pinned constraints file for the session interpreter."""
    filename = f"python{session.python}-{sys.platform}-{platform.machine()}.txt"
    return Path("constraints", filename)


def install_dev(session: Session, *packages: str) -> None:
    """Install ``packages`` honouring the lock file when one has been generated."""
    pinned = constraints(session)
    if pinned.exists():
        session.install("-c", pinned.as_posix(), *packages)
    else:
        session.install(*packages)


@nox.session(python=PYTHON_VERSIONS, venv_backend="uv")
def lock(session: Session) -> None:
    """Lock dependencies."""
    filename = constraints(session)
    filename.parent.mkdir(exist_ok=True)
    session.run(
        "uv",
        "pip",
        "compile",
        "pyproject.toml",
        "--upgrade",
        "--quiet",
        "--all-extras",
        f"--output-file={filename}",
    )


@nox.session(python=PYTHON_VERSIONS[-1], tags=["lint"])
def lint(session: Session) -> None:
    """Run linting with Ruff."""
    install_dev(session, "ruff")
    session.run("ruff", "check", "src", "tests", "noxfile.py")


@nox.session(python=PYTHON_VERSIONS[-1], tags=["format"])
def format_code(session: Session) -> None:
    """Format code with Ruff."""
    install_dev(session, "ruff")
    session.run("ruff", "format", "src", "tests", "noxfile.py")


@nox.session(python=PYTHON_VERSIONS[-1], tags=["sort"])
def sort(session: Session) -> None:
    """Sort imports with Ruff."""
    install_dev(session, "ruff")
    session.run("ruff", "check", "--select", "I", "--fix", "src", "tests")


@nox.session(python=PYTHON_VERSIONS[-1], tags=["typing"])
def typing(session: Session) -> None:
    """Run type checking with Pyright."""
    install_dev(session, "-e", ".[dev]")
    session.run("pyright")


@nox.session(python=PYTHON_VERSIONS, tags=["test"])
def test(session: Session) -> None:
    """Run the unit and integration suites with a coverage floor."""
    install_dev(session, "-e", ".[dev]")
    session.run("pytest", "--cov=splice_buffer", "--cov-report=term-missing", f"--cov-fail-under={COVER_MIN}")


@nox.session(python=PYTHON_VERSIONS[-1], tags=["ci"])
def ci(session: Session) -> None:
    """Run all CI checks."""
    session.notify("lint")
    session.notify("sort")
    session.notify("typing")
    session.notify("test")
