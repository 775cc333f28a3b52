"""
Session-owned dataset with derived statistics and correlations.
"""

import logging
from typing import Dict, Any, List, Optional, Union

import numpy as np
import pandas as pd

from models.data_models import Observation, StatisticsSnapshot
from features.statistics import (
    compute_statistics, compute_correlation_table, observations_to_frame
)
from .generator import SyntheticDatasetGenerator

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class DatasetManager:
    """
    Owns the append-only observation list for a session.
    Statistics and correlations are recomputed after every mutation.
    """

    def __init__(self,
                 size: int = 144,
                 rng: Union[np.random.Generator, int, None] = None,
                 observations: Optional[List[Observation]] = None):
        """
        Initialize the dataset.

        Args:
            size: Number of months to synthesize when no observations are given
            rng: Random source for the synthetic generator
            observations: Pre-built observations to start from instead of generating
        """
        if observations is not None:
            self._dataset = list(observations)
        else:
            self._dataset = SyntheticDatasetGenerator(rng).generate(size)

        self._stats: Optional[StatisticsSnapshot] = None
        self._correlations: Dict[str, float] = {}
        self._refresh()

    def _refresh(self) -> None:
        if not self._dataset:
            self._stats = None
            self._correlations = {}
            return
        self._stats = compute_statistics(self._dataset)
        self._correlations = compute_correlation_table(self._dataset)

    def append_observation(self, fields: Dict[str, Any]) -> Observation:
        """
        Append a new observation with the next sequential id.
        Field ranges are not validated.

        Args:
            fields: Observation fields except id

        Returns:
            The stored observation
        """
        observation = Observation.from_fields(len(self._dataset) + 1, fields)
        self._dataset.append(observation)
        self._refresh()

        logger.info(f"Appended observation #{observation.id} "
                    f"({observation.month}/{observation.year}, waste={observation.waste})")
        return observation

    def get_dataset(self, limit: Optional[int] = None) -> List[Observation]:
        """First `limit` observations, or all of them when limit is falsy."""
        if limit:
            return self._dataset[:limit]
        return list(self._dataset)

    def get_statistics(self) -> Optional[StatisticsSnapshot]:
        return self._stats

    def get_feature_correlations(self) -> Dict[str, float]:
        return dict(self._correlations)

    def get_latest_observation(self) -> Optional[Observation]:
        return self._dataset[-1] if self._dataset else None

    def get_dataset_size(self) -> int:
        return len(self._dataset)

    def to_dataframe(self) -> pd.DataFrame:
        return observations_to_frame(self._dataset)

    def __len__(self) -> int:
        return len(self._dataset)
