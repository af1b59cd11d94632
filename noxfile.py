import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "SECRET_KEY",
    "LOG_LEVEL",
]


def _set_env(session):
    """
    Propagate database and test-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    session.env["ENVIRONMENT"] = "testing"
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "assocvote/", "tests/")
    session.run("black", "assocvote/", "tests/")
    session.run("flake8", "assocvote/", "tests/")
    session.run("mypy", "assocvote/")


@nox.session(name="unit")
def unit(session):
    """
    Run service-level tests against an in-memory SQLite database.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_vote.py::TestWinningOption
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "-m", "unit",
        "-vv",
        "--tb=short",
        "--cov=assocvote",
        "--cov-report=term-missing",
        "--cov-fail-under=80",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run HTTP tests through the FastAPI app.
    Usage:
      nox -s integration
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "-vv",
        "--tb=short",
    )
