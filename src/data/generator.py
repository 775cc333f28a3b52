"""
Synthetic monthly waste dataset generation.
Produces plausible municipal history with seasonal weather and feature-driven waste tonnage.
"""

import logging
from typing import List, Optional, Union

import numpy as np

from models.data_models import Observation

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ANCHOR_YEAR = 2013
ANCHOR_MONTH = 1

BASE_VALUES = {
    'population': 8500,
    'income': 25000,
    'urban_area': 280,
    'rainfall': 150,
    'temperature': 28,
    'trucks': 45,
    'recycling': 18,
    'waste': 785
}

# Contribution of each feature's deviation from baseline to generated waste
WASTE_COEFFICIENTS = {
    'population': 0.02,
    'income': 0.0001,
    'rainfall': -0.1,
    'temperature': 2.0
}

WASTE_BOUNDS = (620, 950)
TRUCK_BOUNDS = (30, 80)
RECYCLING_BOUNDS = (10, 35)

DRY_SEASON_MONTHS = {1, 2, 3, 4, 5, 12}


def make_rng(rng: Union[np.random.Generator, int, None] = None) -> np.random.Generator:
    """Normalize a seed or generator into a numpy Generator."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def is_dry_season(month: int) -> bool:
    return month in DRY_SEASON_MONTHS


def _clamp(value, bounds):
    low, high = bounds
    return max(low, min(high, value))


class SyntheticDatasetGenerator:
    """
    Generates consecutive monthly observations starting at January 2013.

    Without a seed the output differs on every run; the generator models
    plausible history rather than a fixed fixture. Pass a seed or a
    numpy Generator for reproducible data.
    """

    def __init__(self, rng: Union[np.random.Generator, int, None] = None):
        """
        Initialize the generator.

        Args:
            rng: numpy Generator or integer seed (None for OS entropy)
        """
        self.rng = make_rng(rng)
        self.base_values = BASE_VALUES.copy()

    def _uniform(self) -> float:
        return float(self.rng.random())

    def generate(self, count: int = 144) -> List[Observation]:
        """
        Generate `count` consecutive monthly observations.

        Args:
            count: Number of months to generate

        Returns:
            List of observations with ids 1..count
        """
        if count < 0:
            raise ValueError("count cannot be negative")

        dataset = []
        year = ANCHOR_YEAR
        month = ANCHOR_MONTH

        for i in range(count):
            if month > 12:
                month = 1
                year += 1

            dataset.append(self._generate_observation(i + 1, month, year))
            month += 1

        if dataset:
            logger.info(f"Generated {count} observations "
                        f"({dataset[0].year}-{dataset[-1].year})")
        return dataset

    def _generate_observation(self, observation_id: int, month: int, year: int) -> Observation:
        base = self.base_values
        u = self._uniform

        population = base['population'] + u() * 2000 - 1000
        income = base['income'] + u() * 10000 - 5000

        if is_dry_season(month):
            rainfall = 50 + u() * 100
            temperature = 30 + u() * 3
        else:
            rainfall = 150 + u() * 200
            temperature = 27 + u() * 2

        trucks = base['trucks'] + int(np.floor(u() * 10)) - 5
        recycling = base['recycling'] + u() * 10 - 5

        waste = self._waste_for(population, income, rainfall, temperature)
        waste += u() * 50 - 25
        waste = _clamp(waste, WASTE_BOUNDS)

        urban_area = base['urban_area'] + u() * 40 - 20

        return Observation(
            id=observation_id,
            month=month,
            year=year,
            population=round(population),
            income=round(income),
            urban_area=round(urban_area),
            rainfall=round(rainfall),
            temperature=round(temperature, 1),
            trucks=_clamp(trucks, TRUCK_BOUNDS),
            recycling=_clamp(round(recycling, 1), RECYCLING_BOUNDS),
            waste=round(waste)
        )

    def _waste_for(self, population: float, income: float,
                   rainfall: float, temperature: float) -> float:
        """Baseline waste plus linear contributions of feature deviations."""
        base = self.base_values
        deviations = {
            'population': population - base['population'],
            'income': income - base['income'],
            'rainfall': rainfall - base['rainfall'],
            'temperature': temperature - base['temperature']
        }
        waste = base['waste']
        for feature, coefficient in WASTE_COEFFICIENTS.items():
            waste += deviations[feature] * coefficient
        return waste


def generate(count: int = 144,
             rng: Optional[Union[np.random.Generator, int]] = None) -> List[Observation]:
    """Convenience wrapper around SyntheticDatasetGenerator.generate."""
    return SyntheticDatasetGenerator(rng).generate(count)
