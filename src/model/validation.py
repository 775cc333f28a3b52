"""
Evaluation utilities for waste prediction models.
Scores predictions against observed waste tonnage.
"""

from typing import Dict, List, Optional, Sequence
import logging

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error

from utils.exceptions import InvalidInputError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ModelEvaluator:
    """
    Computes error metrics for a series of predictions.
    """

    def __init__(self):
        """Initialize the model evaluator."""
        self.metrics_registry = {
            'rmse': self._root_mean_squared_error,
            'mae': self._mean_absolute_error,
            'mape': self._mean_absolute_percentage_error
        }

    def evaluate_model(self,
                       y_true: Sequence[float],
                       y_pred: Sequence[float],
                       metrics: Optional[List[str]] = None) -> Dict[str, float]:
        """
        Evaluate predictions using multiple metrics.

        Args:
            y_true: Observed values
            y_pred: Predicted values
            metrics: List of metrics to compute (if None, uses all)

        Returns:
            Dictionary of metric names and values

        Raises:
            InvalidInputError: If the series are empty or differ in length
        """
        y_true = np.asarray(y_true, dtype=float)
        y_pred = np.asarray(y_pred, dtype=float)

        if len(y_true) != len(y_pred):
            raise InvalidInputError(
                f"y_true and y_pred must have the same length, got {len(y_true)} and {len(y_pred)}"
            )
        if len(y_true) == 0:
            raise InvalidInputError("Cannot evaluate empty predictions")

        if metrics is None:
            metrics = list(self.metrics_registry.keys())

        results = {}
        for metric in metrics:
            if metric in self.metrics_registry:
                results[metric] = float(self.metrics_registry[metric](y_true, y_pred))
            else:
                logger.warning(f"Unknown metric: {metric}")

        return results

    def _mean_absolute_error(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        return mean_absolute_error(y_true, y_pred)

    def _root_mean_squared_error(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        return np.sqrt(mean_squared_error(y_true, y_pred))

    def _mean_absolute_percentage_error(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """MAPE in percent, skipping zero observations."""
        mask = y_true != 0
        if not np.any(mask):
            return np.nan
        return np.mean(np.abs((y_true[mask] - y_pred[mask]) / y_true[mask])) * 100
