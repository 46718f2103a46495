import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "unit", "integration"]

# The package with its test extra
COMMON_DEPS = ["-e", ".[test]"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "SECRET_KEY",
    "APPROVER_ROLES",
    "TIMEZONE",
    "LOG_LEVEL",
]


def _set_env(session):
    """
    Propagate database and test-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    session.env["ENVIRONMENT"] = "test"
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
    session.run("isort", "officeops/", "tests/")
    session.run("black", "officeops/", "tests/")
    session.run("flake8", "officeops/", "tests/")
    session.run("mypy", "officeops/")


@nox.session(name="unit")
def unit(session):
    """
    Run unit tests (services, core helpers, middleware) on in-memory SQLite.
    Usage:
      nox -s unit
      nox -s unit -- tests/unit/test_services/test_sop.py
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/unit"]
    session.run(
        "pytest",
        *tests,
        "-m", "unit or not integration",
        "-vv",
        "--tb=short",
        "--cov=officeops",
        "--cov-report=term-missing",
        "--cov-report=html:.nox/htmlcov",
        "--cov-report=xml",
    )


@nox.session(name="integration")
def integration(session):
    """
    Run the HTTP API tests through FastAPI's TestClient.
    Usage:
      nox -s integration
      nox -s integration -- tests/integration/test_api/test_meetings.py
    """
    _set_env(session)
    session.install(*COMMON_DEPS)
    tests = session.posargs or ["tests/integration"]
    session.run(
        "pytest",
        *tests,
        "-vv",
        "--tb=short",
    )
