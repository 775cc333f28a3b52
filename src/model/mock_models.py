"""
Simulated waste prediction models.
Each variant mimics the error profile of a well-known estimator with a fixed formula.
"""

from typing import Dict, Any, Union
import logging

import numpy as np

from .base_model import MockWasteModel
from utils.exceptions import ModelNotFoundError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Static importance scores shown alongside the models; not derived from data
FEATURE_IMPORTANCE = {
    'population': 0.85,
    'income': 0.72,
    'rainfall': 0.65,
    'temperature': 0.58,
    'trucks': 0.42,
    'recycling': 0.35
}


class RandomForestLikeModel(MockWasteModel):
    """Mid-accuracy variant modelled on a random forest."""

    def __init__(self, rng: Union[np.random.Generator, int, None] = None):
        super().__init__(
            model_name='random_forest',
            model_type='ensemble',
            baseline=785,
            coefficients={
                'population': 0.025,
                'income': 0.00015,
                'rainfall': -0.12,
                'temperature': 2.5,
                'trucks': 0.3,
                'recycling': -1.2
            },
            noise_half_range=15,
            metric_ranges={
                'rmse': (25, 35),
                'mae': (20, 28),
                'mape': (3.2, 4.0)
            },
            rng=rng
        )


class LinearRegressionLikeModel(MockWasteModel):
    """Highest-error variant modelled on ordinary least squares."""

    def __init__(self, rng: Union[np.random.Generator, int, None] = None):
        super().__init__(
            model_name='linear_regression',
            model_type='linear',
            baseline=750,
            coefficients={
                'population': 0.03,
                'income': 0.0002,
                'rainfall': -0.15,
                'temperature': 3.0,
                'trucks': 0.4,
                'recycling': -1.5
            },
            noise_half_range=20,
            metric_ranges={
                'rmse': (35, 50),
                'mae': (28, 40),
                'mape': (4.5, 6.0)
            },
            rng=rng
        )


class GradientBoostingLikeModel(MockWasteModel):
    """Lowest-error variant modelled on gradient-boosted trees."""

    def __init__(self, rng: Union[np.random.Generator, int, None] = None):
        super().__init__(
            model_name='gradient_boosting',
            model_type='boosting',
            baseline=790,
            coefficients={
                'population': 0.022,
                'income': 0.00012,
                'rainfall': -0.11,
                'temperature': 2.2,
                'trucks': 0.25,
                'recycling': -1.1
            },
            noise_half_range=12.5,
            metric_ranges={
                'rmse': (22, 30),
                'mae': (18, 25),
                'mape': (2.8, 3.5)
            },
            rng=rng
        )


def create_model(variant: str, **kwargs) -> MockWasteModel:
    """
    Factory function to create simulated models.

    Args:
        variant: Variant name (see MODEL_VARIANTS)
        **kwargs: Model-specific parameters, e.g. rng

    Returns:
        Model instance

    Raises:
        ModelNotFoundError: If the variant is unknown
    """
    key = variant.lower()
    if key not in MODEL_VARIANTS:
        available = ', '.join(MODEL_VARIANTS.keys())
        raise ModelNotFoundError(f"Unknown model variant: {variant}. Available: {available}")

    return MODEL_VARIANTS[key]['class'](**kwargs)


# Registry of available variants, in display order
MODEL_VARIANTS: Dict[str, Dict[str, Any]] = {
    'random_forest': {
        'class': RandomForestLikeModel
    },
    'linear_regression': {
        'class': LinearRegressionLikeModel
    },
    'gradient_boosting': {
        'class': GradientBoostingLikeModel
    }
}
