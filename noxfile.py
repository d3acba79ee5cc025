import os

import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13", "3.14"]

# psycopg2 ships a C extension; poetry's wheel cache can serve a .so built
# for another interpreter, so the postgres session rebuilds it.
_POSTGRES_EXTRA = "postgresql"
_C_EXT_PACKAGES = ["psycopg2"]


def _install(session: nox.Session, *extras: str) -> None:
    """Install the project and its test group, plus any optional extras."""
    args = ["poetry", "install", "--with", "test"]
    for extra in extras:
        args += ["--extras", extra]
    session.run(*args, external=True)

    if _POSTGRES_EXTRA in extras:
        session.run("pip", "install", "--force-reinstall", "--no-cache-dir", *_C_EXT_PACKAGES)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the full suite on the in-memory providers."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_client(session: nox.Session) -> None:
    """Client-side cart and checkout tests only (no API server involved)."""
    _install(session)
    session.run("pytest", "tests/storefront/", "-m", "not integration")


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Domain-layer tests only (no infrastructure required)."""
    _install(session)
    session.run("pytest", "tests/ordering/domain/", "tests/payments/domain/", "tests/storefront/domain/")


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_postgres(session: nox.Session) -> None:
    """Ordering tests against PostgreSQL through the production config overlay.

    Needs DATABASE_URL pointing at a disposable database.
    """
    if not os.environ.get("DATABASE_URL"):
        session.skip("DATABASE_URL is not set")
    _install(session, _POSTGRES_EXTRA)
    session.run("storefront-manage", "setup-db", env={"PROTEAN_ENV": "production"})
    session.run("pytest", "--env", "production", "tests/ordering/", "tests/storefront/integration/")
