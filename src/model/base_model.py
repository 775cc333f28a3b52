"""
Base model interface for the waste forecasting core.
Provides the common interface for the simulated prediction models.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Tuple, Union
import numpy as np
from datetime import datetime
import logging

from models.data_models import ModelMetrics, Observation, PredictionInputs

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PREDICTION_BOUNDS = (600, 1000)

# Per-request noise shrink applied on top of each variant's noise half-range
NOISE_DECAY_PER_PREDICTION = 0.005

# Compounding metric improvement per recorded prediction
IMPROVEMENT_RATE = 0.95

FEATURE_BASELINES = {
    'population': 8500,
    'income': 25000,
    'rainfall': 150,
    'temperature': 28,
    'trucks': 45,
    'recycling': 18
}


def noise_factor(invocation_count: int) -> float:
    """Noise scale after `invocation_count` predictions, floored at zero."""
    return max(0.0, 1.0 - invocation_count * NOISE_DECAY_PER_PREDICTION)


def improvement_factor(invocation_count: int) -> float:
    """Metric multiplier after `invocation_count` predictions."""
    return IMPROVEMENT_RATE ** invocation_count


class BaseWasteModel(ABC):
    """
    Abstract base class for all waste prediction models.
    Defines the common interface that all models must implement.
    """

    def __init__(self, model_name: str, model_type: str):
        """
        Initialize the base model.

        Args:
            model_name: Identifier of the model variant
            model_type: Type category (e.g., 'ensemble', 'linear', 'boosting')
        """
        self.model_name = model_name
        self.model_type = model_type
        self.is_fitted = False
        self.metrics = ModelMetrics()
        self.training_history = []

        logger.info(f"Initialized {self.model_type} model: {self.model_name}")

    @abstractmethod
    def fit(self, invocation_count: int = 0) -> ModelMetrics:
        """
        Train the model.

        Args:
            invocation_count: Number of predictions recorded so far in the session

        Returns:
            Metrics of the training run
        """
        pass

    @abstractmethod
    def predict(self, inputs: PredictionInputs, invocation_count: int = 0) -> Optional[int]:
        """
        Predict waste for a single input vector.

        Args:
            inputs: Feature vector
            invocation_count: Number of predictions recorded so far in the session

        Returns:
            Predicted waste in tons, or None if the model is not trained
        """
        pass

    def predict_batch(self, observations: List[Observation], invocation_count: int = 0) -> List[int]:
        """
        Predict waste for each observation in order.

        Args:
            observations: Observations to use as input vectors
            invocation_count: Number of predictions recorded so far in the session

        Returns:
            List of predictions (empty if the model is not trained)
        """
        if not self.is_fitted:
            return []

        predictions = []
        for observation in observations:
            inputs = PredictionInputs(
                population=observation.population,
                income=observation.income,
                urban_area=observation.urban_area,
                rainfall=observation.rainfall,
                temperature=observation.temperature,
                trucks=observation.trucks,
                recycling=observation.recycling,
                month=observation.month,
                year=observation.year
            )
            predictions.append(self.predict(inputs, invocation_count))
        return predictions

    def get_training_history(self) -> List[Dict[str, Any]]:
        return self.training_history.copy()

    def get_model_info(self) -> Dict[str, Any]:
        """
        Get comprehensive model information.

        Returns:
            Dictionary with model metadata and performance
        """
        return {
            'model_name': self.model_name,
            'model_type': self.model_type,
            'is_fitted': self.is_fitted,
            'metrics': self.metrics.to_dict(),
            'training_runs': len(self.training_history)
        }

    def __str__(self) -> str:
        return f"{self.model_type.title()}Model({self.model_name})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.model_name}', type='{self.model_type}', fitted={self.is_fitted})"


class MockWasteModel(BaseWasteModel):
    """
    Simulated model: a fixed linear formula over feature deviations plus noise.
    Training draws metrics from configured ranges instead of fitting anything.
    """

    def __init__(self,
                 model_name: str,
                 model_type: str,
                 baseline: float,
                 coefficients: Dict[str, float],
                 noise_half_range: float,
                 metric_ranges: Dict[str, Tuple[float, float]],
                 rng: Union[np.random.Generator, int, None] = None):
        """
        Initialize the simulated model.

        Args:
            model_name: Identifier of the model variant
            model_type: Type category
            baseline: Waste predicted when every input sits at its baseline
            coefficients: Weight applied to each feature's deviation from baseline
            noise_half_range: Maximum absolute noise before decay
            metric_ranges: (low, high) draw range for 'rmse', 'mae' and 'mape'
            rng: numpy Generator or seed for noise and metric draws
        """
        super().__init__(model_name, model_type)
        self.baseline = baseline
        self.coefficients = dict(coefficients)
        self.noise_half_range = noise_half_range
        self.metric_ranges = dict(metric_ranges)
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

    def _draw(self, low: float, high: float) -> float:
        return low + float(self.rng.random()) * (high - low)

    def fit(self, invocation_count: int = 0) -> ModelMetrics:
        factor = improvement_factor(invocation_count)

        rmse = self._draw(*self.metric_ranges['rmse']) * factor
        mae = self._draw(*self.metric_ranges['mae']) * factor
        mape = self._draw(*self.metric_ranges['mape']) * factor

        self.metrics = ModelMetrics(rmse=rmse, mae=mae, mape=mape)
        self.is_fitted = True
        self.training_history.append({
            'trained_at': datetime.now(),
            'invocation_count': invocation_count,
            'metrics': self.metrics.to_dict()
        })

        logger.info(f"Trained {self.model_name}: RMSE={rmse:.2f}, MAE={mae:.2f}, MAPE={mape:.2f}%")
        return self.metrics

    def predict(self, inputs: PredictionInputs, invocation_count: int = 0) -> Optional[int]:
        if not self.is_fitted:
            return None

        waste = self.baseline
        for feature, coefficient in self.coefficients.items():
            waste += (getattr(inputs, feature) - FEATURE_BASELINES[feature]) * coefficient

        scale = noise_factor(invocation_count)
        waste += (float(self.rng.random()) * 2 - 1) * self.noise_half_range * scale

        low, high = PREDICTION_BOUNDS
        return int(max(low, min(high, round(waste))))
