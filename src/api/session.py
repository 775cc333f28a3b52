"""
Session object wiring the dataset, statistics and prediction engine together.
One session lives for the whole process; nothing is persisted.
"""

import asyncio
import logging
from typing import Dict, Any, List, Optional, Union

import numpy as np

from data.dataset_manager import DatasetManager
from model.prediction_engine import PredictionEngine
from models.data_models import (
    ModelMetrics, Observation, PredictionInputs, StatisticsSnapshot
)
from utils.config import Config

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class WastePredictSession:
    """
    Explicit session context for the forecasting core.

    Synchronous methods are atomic steps. The *_async methods add the
    training delays used for progress animation and are serialized with
    a lock so a dataset mutation never interleaves with another one.
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 rng: Union[np.random.Generator, int, None] = None):
        """
        Initialize the session.

        Args:
            config: Session configuration (read from the environment if None)
            rng: numpy Generator or seed; falls back to config.RANDOM_SEED
        """
        self.config = config or Config.from_env()
        logging.getLogger().setLevel(self.config.LOG_LEVEL)

        if rng is None:
            rng = self.config.RANDOM_SEED
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)

        self.dataset = DatasetManager(size=self.config.DATASET_SIZE, rng=self.rng)
        self.engine = PredictionEngine(rng=self.rng)
        self._lock = asyncio.Lock()

        logger.info(f"Session started with {len(self.dataset)} observations")

    # Dataset and statistics

    def get_dataset(self, limit: Optional[int] = None) -> List[Observation]:
        return self.dataset.get_dataset(limit)

    def get_statistics(self) -> Optional[StatisticsSnapshot]:
        return self.dataset.get_statistics()

    def get_feature_correlations(self) -> Dict[str, float]:
        return self.dataset.get_feature_correlations()

    def append_observation(self, fields: Dict[str, Any]) -> Observation:
        return self.dataset.append_observation(fields)

    # Models

    def get_trained_variants(self) -> List[str]:
        return self.engine.get_trained_variants()

    def get_model_metrics(self, variant: str) -> Optional[ModelMetrics]:
        return self.engine.get_model_metrics(variant)

    def get_feature_importance(self) -> Dict[str, float]:
        return self.engine.get_feature_importance()

    def train(self, variant: str) -> ModelMetrics:
        return self.engine.train(variant)

    def train_all(self) -> Dict[str, ModelMetrics]:
        return self.engine.train_all()

    def predict(self, inputs: PredictionInputs) -> Dict[str, int]:
        return self.engine.predict(inputs)

    def generate_predictions(self, dataset: Optional[List[Observation]] = None) -> Dict[str, List[int]]:
        """Bulk predictions for `dataset` (the whole session dataset if None)."""
        if dataset is None:
            dataset = self.dataset.get_dataset()
        return self.engine.generate_predictions(dataset)

    def predict_and_learn(self, inputs: PredictionInputs) -> Dict[str, int]:
        """
        Predict, feed the mean prediction back as a new observation, and retrain.

        Returns:
            Predictions per trained variant; empty if no variant is trained
        """
        predictions = self._predict_and_append(inputs)
        if predictions:
            self.engine.train_all()
        return predictions

    def _predict_and_append(self, inputs: PredictionInputs) -> Dict[str, int]:
        if not self.engine.get_trained_variants():
            logger.warning("Please train at least one model first")
            return {}

        predictions = self.engine.predict(inputs)

        fields = inputs.to_dict()
        fields['waste'] = int(round(float(np.mean(list(predictions.values())))))
        self.dataset.append_observation(fields)
        return predictions

    # Cooperative variants with animation delays

    async def train_async(self, variant: str) -> ModelMetrics:
        async with self._lock:
            await asyncio.sleep(self.config.TRAINING_DELAY)
            return self.engine.train(variant)

    async def train_all_async(self) -> Dict[str, ModelMetrics]:
        results = {}
        for variant in self.engine.models:
            results[variant] = await self.train_async(variant)
        logger.info("All models trained successfully")
        return results

    async def predict_and_learn_async(self, inputs: PredictionInputs) -> Dict[str, int]:
        async with self._lock:
            predictions = self._predict_and_append(inputs)
        if predictions:
            await asyncio.sleep(self.config.RETRAIN_DELAY)
            await self.train_all_async()
        return predictions
