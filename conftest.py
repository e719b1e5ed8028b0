import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402

from src.utils.config import GENERATOR_SETTINGS, Configuration  # noqa: E402

SEEDS = ["Terra-1000", "Kepler-22b", "", "Земля"]


class ConstantNoise:
    """Noise field that returns the same raw value everywhere."""

    def __init__(self, value):
        self.value = value

    def sample(self, point, frequency, time_offset=0.0):
        return self.value

    def sample_many(self, points, frequency, time_offset=0.0):
        return np.full(len(points), self.value, dtype=float)


@pytest.fixture(autouse=True)
def close_figures():
    """Close every matplotlib figure a test opened."""
    yield
    plt.close("all")


@pytest.fixture
def eventful_config():
    """Configuration where every roll that can succeed does."""
    settings = dict(GENERATOR_SETTINGS, water_probability=1.0, life_probability=1.0,
                    satellite_probability=1.0, lifeform_probability=1.0)
    return Configuration({
        "generator_settings": settings,
        "event_probabilities": {"early": 1.0, "middle": 1.0, "late": 1.0},
    })


@pytest.fixture
def quiet_config():
    """Configuration where no event, satellite or lifeform ever appears."""
    settings = dict(GENERATOR_SETTINGS, satellite_probability=0.0,
                    lifeform_probability=0.0)
    return Configuration({
        "generator_settings": settings,
        "event_probabilities": {"early": 0.0, "middle": 0.0, "late": 0.0},
    })
