import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]


def _install(session: nox.Session) -> None:
    """Install the project with test extras into the nox virtualenv."""
    session.install("-e", ".[test]")


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run full test suite across Python versions."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS)
def tests_domain(session: nox.Session) -> None:
    """Run domain and application tests only (no HTTP surface, no FCM)."""
    _install(session)
    session.run(
        "pytest",
        "tests/messaging/domain/",
        "tests/messaging/application/",
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def e2e(session: nox.Session) -> None:
    """Run the FCM smoke test. Needs TEST_E2E, FCM_SERVER_KEY and E2E_SAMPLE_TOKEN."""
    _install(session)
    session.run("pytest", "tests/messaging/e2e/", "-m", "e2e")
