"""
Descriptive statistics and correlation analysis for waste datasets.
Computes the aggregate snapshot and per-feature Pearson correlations against waste.
"""

import logging
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from models.data_models import Observation, StatisticsSnapshot, CORRELATION_FEATURES
from utils.exceptions import InvalidInputError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def observations_to_frame(dataset: Sequence[Observation]) -> pd.DataFrame:
    """
    Convert observations to a DataFrame, one row per observation in order.

    Args:
        dataset: Sequence of observations

    Returns:
        DataFrame with one column per observation field
    """
    columns = list(Observation.__dataclass_fields__.keys())
    return pd.DataFrame([obs.to_dict() for obs in dataset], columns=columns)


def compute_statistics(dataset: Sequence[Observation]) -> StatisticsSnapshot:
    """
    Compute the aggregate statistics snapshot for a dataset.

    Args:
        dataset: Non-empty sequence of observations

    Returns:
        StatisticsSnapshot describing the dataset

    Raises:
        InvalidInputError: If the dataset is empty
    """
    if len(dataset) == 0:
        raise InvalidInputError("Cannot compute statistics of an empty dataset")

    df = observations_to_frame(dataset)

    # Year span follows insertion order, not min/max
    start_year = int(dataset[0].year)
    end_year = int(dataset[-1].year)
    min_waste = float(df['waste'].min())
    max_waste = float(df['waste'].max())

    return StatisticsSnapshot(
        total_records=len(df),
        start_year=start_year,
        end_year=end_year,
        time_span=end_year - start_year + 1,
        avg_waste=float(df['waste'].mean()),
        min_waste=min_waste,
        max_waste=max_waste,
        waste_range=max_waste - min_waste,
        avg_population=float(df['population'].mean()),
        avg_income=float(df['income'].mean()),
        avg_rainfall=float(df['rainfall'].mean()),
        avg_temperature=float(df['temperature'].mean())
    )


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Pearson correlation coefficient using the closed-form sum formula.

    r = (nΣxy - ΣxΣy) / sqrt((nΣx² - (Σx)²)(nΣy² - (Σy)²))

    Args:
        xs: First series
        ys: Second series, same length as xs

    Returns:
        Coefficient in [-1, 1], or 0.0 when either series is constant

    Raises:
        InvalidInputError: If the series are empty or differ in length
    """
    if len(xs) != len(ys):
        raise InvalidInputError(
            f"Series must have the same length, got {len(xs)} and {len(ys)}"
        )
    if len(xs) == 0:
        raise InvalidInputError("Cannot correlate empty series")

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    n = len(x)

    if np.all(x == x[0]) or np.all(y == y[0]):
        return 0.0

    # Centering leaves r unchanged and keeps the sums small for large-magnitude series
    x = x - x.mean()
    y = y - y.mean()

    sum_x = x.sum()
    sum_y = y.sum()
    numerator = n * (x * y).sum() - sum_x * sum_y
    denominator_sq = (n * (x * x).sum() - sum_x ** 2) * (n * (y * y).sum() - sum_y ** 2)

    if denominator_sq <= 0:
        return 0.0

    denominator = np.sqrt(denominator_sq)
    if denominator == 0:
        return 0.0

    return float(np.clip(numerator / denominator, -1.0, 1.0))


def compute_correlation_table(dataset: Sequence[Observation],
                              features: List[str] = None) -> Dict[str, float]:
    """
    Correlate each feature with waste.

    Args:
        dataset: Non-empty sequence of observations
        features: Feature names to correlate (defaults to the six model inputs)

    Returns:
        Mapping of feature name to Pearson coefficient
    """
    if len(dataset) == 0:
        raise InvalidInputError("Cannot compute correlations of an empty dataset")

    if features is None:
        features = CORRELATION_FEATURES

    waste = [obs.waste for obs in dataset]
    correlations = {}
    for feature in features:
        values = [getattr(obs, feature) for obs in dataset]
        correlations[feature] = pearson_correlation(values, waste)

    logger.debug(f"Computed correlations for {len(features)} features over {len(dataset)} records")
    return correlations
