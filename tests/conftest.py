from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

FIXED_NOW = datetime(2024, 6, 20, 12, 0, 0, tzinfo=timezone.utc)


def make_flat_rng():
    """Generador falso: uniform → límite inferior, ruido gaussiano → 0."""
    rng = MagicMock()
    rng.uniform.side_effect = lambda lo, hi: lo
    rng.normal.return_value = 0.0
    rng.standard_normal.return_value = 0.0
    return rng


@pytest.fixture
def flat_rng():
    return make_flat_rng()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
