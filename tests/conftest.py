from __future__ import annotations

import os

import pytest

try:
    from hypothesis import HealthCheck, settings
except ImportError:  # pragma: no cover - hypothesis is optional in some environments
    HealthCheck = None  # type: ignore[assignment]
    settings = None  # type: ignore[assignment]


def pytest_configure(config: pytest.Config) -> None:
    """Surface legacy-attribute deprecations and configure Hypothesis defaults."""

    config.addinivalue_line(
        "filterwarnings",
        "default::DeprecationWarning:inline_table.*",
    )

    default_profile = _configure_hypothesis_profiles()
    if settings is None:
        return

    selected = config.getoption("hypothesis_profile", default=None)
    if selected:
        settings.load_profile(selected)
    elif os.getenv("CI"):
        settings.load_profile("ci")
    else:
        settings.load_profile(default_profile)


_HYPOTHESIS_PROFILES_REGISTERED = False


def _configure_hypothesis_profiles() -> str:
    """Register Hypothesis profiles and return the default profile name."""

    global _HYPOTHESIS_PROFILES_REGISTERED
    if settings is None:
        return "dev"

    if not _HYPOTHESIS_PROFILES_REGISTERED:
        suppress_checks = (HealthCheck.too_slow,) if HealthCheck else ()
        settings.register_profile(
            "dev",
            settings(max_examples=40, deadline=500, suppress_health_check=suppress_checks),
        )
        settings.register_profile(
            "ci",
            settings(max_examples=150, deadline=None, print_blob=True, suppress_health_check=suppress_checks),
        )
        _HYPOTHESIS_PROFILES_REGISTERED = True
    return "dev"


@pytest.fixture
def sample_records() -> list[dict[str, object]]:
    return [
        {"Asset": "Primary Home", "Owner": "Parents", "Value": 612000},
        {"Asset": "Gold (100 gms)", "Owner": "Parents", "Value": 7300},
        {"Asset": "Net Worth", "Owner": "Kid 1", "Value": 94000},
    ]
