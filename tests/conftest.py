import secrets

import numpy as np
import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--seed",
        action="store",
        default=None,
        help="Seed for the random geometries. If omitted, a fresh seed is generated.",
    )


def pytest_configure(config):
    cli_value = config.getoption("--seed")
    config._numpy_seed = (
        int(cli_value) if cli_value is not None else secrets.randbelow(2**32)
    )


def pytest_report_header(config):
    return f"numpy seed: {config._numpy_seed}"


@pytest.fixture
def rng(request):
    """Random generator seeded from --seed, so failures can be replayed."""
    return np.random.default_rng(request.config._numpy_seed)


@pytest.fixture
def leucine():
    """N, CA, C, O, CB, CG, CD1, CD2 of a leucine residue (Angstrom)."""
    # fmt: off
    return np.array([
        [24.969, 13.428, 30.692],  # N
        [24.044, 12.661, 29.808],  # CA
        [22.785, 13.482, 29.543],  # C
        [21.951, 13.670, 30.431],  # O
        [23.672, 11.328, 30.466],  # CB
        [22.881, 10.326, 29.620],  # CG
        [23.691,  9.935, 28.389],  # CD1
        [22.557,  9.096, 30.459],  # CD2
    ])
    # fmt: on
