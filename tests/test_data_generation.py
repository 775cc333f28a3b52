"""
Unit tests for synthetic dataset generation and the session dataset manager.
"""

import unittest
import numpy as np
import pandas as pd
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from data.generator import (
    SyntheticDatasetGenerator, generate, is_dry_season,
    WASTE_BOUNDS, TRUCK_BOUNDS, RECYCLING_BOUNDS
)
from data.dataset_manager import DatasetManager
from models.data_models import Observation, CORRELATION_FEATURES
from utils.exceptions import InvalidInputError


class TestSyntheticDatasetGenerator(unittest.TestCase):
    """Test cases for SyntheticDatasetGenerator."""

    def setUp(self):
        """Set up test fixtures."""
        self.generator = SyntheticDatasetGenerator(rng=42)
        self.dataset = self.generator.generate(144)

    def test_length_and_ids(self):
        """Ids are 1..N in insertion order."""
        self.assertEqual(len(self.dataset), 144)
        self.assertEqual([obs.id for obs in self.dataset], list(range(1, 145)))

    def test_calendar_progression(self):
        """Months cycle 1-12 starting January 2013."""
        for i, obs in enumerate(self.dataset):
            self.assertEqual(obs.month, i % 12 + 1)
            self.assertEqual(obs.year, 2013 + i // 12)

        self.assertEqual((self.dataset[0].month, self.dataset[0].year), (1, 2013))
        self.assertEqual((self.dataset[143].month, self.dataset[143].year), (12, 2024))

    def test_value_bounds(self):
        """Clamped fields stay in range."""
        for obs in self.dataset:
            self.assertGreaterEqual(obs.waste, WASTE_BOUNDS[0])
            self.assertLessEqual(obs.waste, WASTE_BOUNDS[1])
            self.assertGreaterEqual(obs.trucks, TRUCK_BOUNDS[0])
            self.assertLessEqual(obs.trucks, TRUCK_BOUNDS[1])
            self.assertGreaterEqual(obs.recycling, RECYCLING_BOUNDS[0])
            self.assertLessEqual(obs.recycling, RECYCLING_BOUNDS[1])
            self.assertIsInstance(obs.waste, int)
            self.assertIsInstance(obs.trucks, int)

    def test_feature_ranges(self):
        """Perturbed features stay within their documented spread."""
        for obs in self.dataset:
            self.assertTrue(7500 <= obs.population <= 9500)
            self.assertTrue(20000 <= obs.income <= 30000)
            self.assertTrue(260 <= obs.urban_area <= 300)
            self.assertTrue(40 <= obs.trucks <= 49)

    def test_seasonal_weather(self):
        """Dry months are drier and hotter than wet months."""
        for obs in self.dataset:
            if is_dry_season(obs.month):
                self.assertTrue(50 <= obs.rainfall <= 150)
                self.assertTrue(30 <= obs.temperature <= 33)
            else:
                self.assertTrue(150 <= obs.rainfall <= 350)
                self.assertTrue(27 <= obs.temperature <= 29)

    def test_dry_season_months(self):
        """December and January through May are dry."""
        dry = [m for m in range(1, 13) if is_dry_season(m)]
        self.assertEqual(dry, [1, 2, 3, 4, 5, 12])

    def test_seeded_reproducibility(self):
        """Same seed, same data."""
        first = generate(24, rng=7)
        second = generate(24, rng=7)
        self.assertEqual([o.to_dict() for o in first], [o.to_dict() for o in second])

    def test_accepts_numpy_generator(self):
        """A numpy Generator can be injected directly."""
        rng = np.random.default_rng(3)
        generator = SyntheticDatasetGenerator(rng)
        self.assertIs(generator.rng, rng)
        self.assertEqual(len(generator.generate(5)), 5)

    def test_empty_and_negative_counts(self):
        """Zero yields nothing; negative counts are rejected."""
        self.assertEqual(self.generator.generate(0), [])
        with self.assertRaises(ValueError):
            self.generator.generate(-1)

    def test_waste_tracks_population(self):
        """Generated waste correlates positively with population."""
        dataset = generate(600, rng=11)
        population = [o.population for o in dataset]
        waste = [o.waste for o in dataset]
        self.assertGreater(np.corrcoef(population, waste)[0, 1], 0)


class TestDatasetManager(unittest.TestCase):
    """Test cases for DatasetManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.manager = DatasetManager(size=144, rng=42)
        self.new_fields = {
            'month': 1,
            'year': 2025,
            'population': 9000,
            'income': 26000,
            'urban_area': 280,
            'rainfall': 120,
            'temperature': 31.0,
            'trucks': 50,
            'recycling': 20.0,
            'waste': 999
        }

    def test_initial_state(self):
        """Statistics and correlations exist after generation."""
        self.assertEqual(self.manager.get_dataset_size(), 144)
        stats = self.manager.get_statistics()
        self.assertEqual(stats.total_records, 144)
        self.assertEqual(stats.start_year, 2013)
        self.assertEqual(stats.end_year, 2024)
        self.assertEqual(stats.time_span, 12)
        self.assertEqual(set(self.manager.get_feature_correlations()), set(CORRELATION_FEATURES))

    def test_append_observation(self):
        """Appending assigns the next id and refreshes statistics."""
        before = self.manager.get_statistics()
        observation = self.manager.append_observation(self.new_fields)

        self.assertEqual(observation.id, 145)
        self.assertEqual(self.manager.get_latest_observation(), observation)
        stats = self.manager.get_statistics()
        self.assertEqual(stats.total_records, 145)
        self.assertEqual(stats.end_year, 2025)
        self.assertEqual(stats.max_waste, 999)
        self.assertNotEqual(stats.avg_waste, before.avg_waste)

    def test_append_ignores_supplied_id(self):
        """Ids always follow insertion order."""
        fields = dict(self.new_fields, id=1)
        observation = self.manager.append_observation(fields)
        self.assertEqual(observation.id, 145)

    def test_append_does_not_validate_ranges(self):
        """Out-of-range values are stored as given."""
        fields = dict(self.new_fields, trucks=500, recycling=90.0, waste=5000)
        observation = self.manager.append_observation(fields)
        self.assertEqual(observation.trucks, 500)
        self.assertEqual(observation.waste, 5000)

    def test_append_accepts_dashboard_names(self):
        """camelCase urbanArea maps onto urban_area."""
        fields = dict(self.new_fields)
        fields['urbanArea'] = fields.pop('urban_area') + 15
        observation = self.manager.append_observation(fields)
        self.assertEqual(observation.urban_area, 295)
        self.assertEqual(self.manager.get_dataset_size(), 145)

    def test_append_missing_field(self):
        """A missing field is reported by name and nothing is appended."""
        fields = dict(self.new_fields)
        del fields['rainfall']
        with self.assertRaises(InvalidInputError) as ctx:
            self.manager.append_observation(fields)
        self.assertIn('rainfall', str(ctx.exception))
        self.assertEqual(self.manager.get_dataset_size(), 144)

    def test_get_dataset_limit(self):
        """Limit returns a prefix; falsy limit returns everything."""
        self.assertEqual(len(self.manager.get_dataset(24)), 24)
        self.assertEqual(self.manager.get_dataset(24)[0].id, 1)
        self.assertEqual(len(self.manager.get_dataset()), 144)
        self.assertEqual(len(self.manager.get_dataset(0)), 144)

    def test_returned_dataset_is_a_copy(self):
        """Callers cannot mutate the session dataset through accessors."""
        snapshot = self.manager.get_dataset()
        snapshot.clear()
        self.assertEqual(self.manager.get_dataset_size(), 144)

    def test_to_dataframe(self):
        """DataFrame export has one row per observation."""
        df = self.manager.to_dataframe()
        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(len(df), 144)
        self.assertIn('waste', df.columns)
        self.assertEqual(list(df['id']), list(range(1, 145)))

    def test_empty_manager(self):
        """An empty dataset has no statistics until something is appended."""
        manager = DatasetManager(size=0)
        self.assertIsNone(manager.get_statistics())
        self.assertEqual(manager.get_feature_correlations(), {})
        self.assertIsNone(manager.get_latest_observation())

        manager.append_observation(self.new_fields)
        stats = manager.get_statistics()
        self.assertEqual(stats.total_records, 1)
        self.assertEqual(stats.waste_range, 0)

    def test_prebuilt_observations(self):
        """A manager can start from given observations."""
        observations = [
            Observation(id=1, month=1, year=2020, population=8000, income=24000,
                        urban_area=280, rainfall=100, temperature=30.0,
                        trucks=45, recycling=18.0, waste=700),
            Observation(id=2, month=2, year=2020, population=9000, income=26000,
                        urban_area=280, rainfall=110, temperature=31.0,
                        trucks=46, recycling=19.0, waste=800)
        ]
        manager = DatasetManager(observations=observations)
        self.assertEqual(manager.get_dataset_size(), 2)
        self.assertAlmostEqual(manager.get_feature_correlations()['population'], 1.0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
