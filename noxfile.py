"""Local QA sessions for the Fastly metrics collector."""

from __future__ import annotations

from pathlib import Path

import nox

PROJECT_DIR = Path(__file__).parent
SOURCE_DIRS = ("application", "controllers", "domain", "infrastructure", "services", "shared", "tools", "tests")

nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = ("lint", "typecheck", "tests")


def _install_project(session: nox.Session, *extra: str) -> None:
    """Install the project with its test extra plus any session tools."""

    session.install("-e", f"{PROJECT_DIR}[test]")
    if extra:
        session.install(*extra)


@nox.session
def lint(session: nox.Session) -> None:
    """Run flake8 over the main modules."""

    session.install("flake8>=7.0.0")
    session.run("flake8", "--max-line-length=120", *SOURCE_DIRS)


@nox.session
def typecheck(session: nox.Session) -> None:
    """Validate types with mypy."""

    _install_project(session, "mypy>=1.11.0", "types-requests")
    session.run("mypy", *SOURCE_DIRS)


@nox.session
def tests(session: nox.Session) -> None:
    """Run the pytest suite with coverage."""

    _install_project(session)
    session.run("pytest", "--cov", "--cov-report=term-missing", *session.posargs)
