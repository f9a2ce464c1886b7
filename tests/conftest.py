"""Pytest configuration for beaconjson tests."""

import sys

import pytest

from helpers import make_block_body_obj


def pytest_addoption(parser):
    """Add command line options for the test suite."""
    parser.addoption(
        "--spec-tests-dir",
        action="store",
        default=None,
        help="Path to the extracted spec tests directory (defaults to tests/spec-tests/tests/{preset})",
    )
    parser.addoption(
        "--preset",
        action="store",
        default="mainnet",
        choices=["minimal", "mainnet"],
        help="Preset to use for tests (minimal or mainnet)",
    )


def pytest_configure(config):
    """Set preset BEFORE any imports happen during test collection.

    This is critical because SSZ types use Vector[T, N()] where N() is
    evaluated at class definition time. We must set the preset before
    any type modules are imported.
    """
    preset = config.getoption("--preset", default="mainnet")

    type_modules = [
        "beaconjson.codec",
        "beaconjson.codec.block_body",
        "beaconjson.spec.types",
        "beaconjson.spec.types.base",
        "beaconjson.spec.types.phase0",
        "beaconjson.spec.types.altair",
        "beaconjson.spec.types.capella",
        "beaconjson.spec.types.deneb",
        "beaconjson.spec.types.electra",
    ]
    for mod in type_modules:
        if mod in sys.modules:
            del sys.modules[mod]

    from beaconjson.spec.constants import set_preset as do_set_preset
    do_set_preset(preset)


@pytest.fixture(scope="session")
def preset(request):
    """Return the preset being used."""
    return request.config.getoption("--preset")


@pytest.fixture
def body_obj() -> dict:
    return make_block_body_obj()
