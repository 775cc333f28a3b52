"""
Request handlers between the presentation layer and the forecasting core.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Mapping, Optional
import logging

from models.data_models import PredictionInputs, normalize_field_names
from utils.exceptions import WastePredictError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

INTEGER_FIELDS = {'month', 'year', 'trucks'}


class APIHandler(ABC):
    """Abstract base class for request handling."""

    @abstractmethod
    def parse_request(self, request: Mapping[str, Any]) -> Any:
        """Convert a raw request into typed inputs."""
        pass

    @abstractmethod
    def process_request(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        """Process a raw request end to end."""
        pass

    @abstractmethod
    def format_response(self, data: Any) -> Dict[str, Any]:
        """Format response data for the presentation layer."""
        pass

    @abstractmethod
    def handle_error(self, error: Exception) -> Dict[str, Any]:
        """Handle and format error responses."""
        pass


def _coerce(value: Any, integer: bool) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == '':
            return None
    try:
        return int(float(value)) if integer else float(value)
    except (TypeError, ValueError):
        return None


class PredictionRequestHandler(APIHandler):
    """
    Turns loosely typed prediction form values into PredictionInputs
    and runs them through a session.
    """

    def __init__(self, session, learn: bool = True):
        """
        Args:
            session: WastePredictSession to run predictions against
            learn: Feed each prediction back into the dataset and retrain
        """
        self.session = session
        self.learn = learn

    def parse_request(self, request: Mapping[str, Any]) -> PredictionInputs:
        """
        Build prediction inputs, substituting defaults for absent,
        empty or unparseable values.
        """
        defaults = PredictionInputs()
        normalized = normalize_field_names(request)

        values = {}
        for name in defaults.to_dict():
            parsed = _coerce(normalized.get(name), name in INTEGER_FIELDS)
            if parsed is None:
                parsed = getattr(defaults, name)
            values[name] = parsed

        return PredictionInputs(**values)

    def process_request(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            inputs = self.parse_request(request)
            if self.learn:
                predictions = self.session.predict_and_learn(inputs)
            else:
                predictions = self.session.predict(inputs)
            return self.format_response({'inputs': inputs, 'predictions': predictions})
        except WastePredictError as e:
            return self.handle_error(e)

    def format_response(self, data: Any) -> Dict[str, Any]:
        inputs: PredictionInputs = data['inputs']
        predictions: Dict[str, int] = data['predictions']
        return {
            'success': bool(predictions),
            'period': inputs.period_label,
            'inputs': inputs.to_dict(),
            'predictions': dict(predictions),
            'prediction_count': self.session.engine.get_prediction_count()
        }

    def handle_error(self, error: Exception) -> Dict[str, Any]:
        logger.error(f"Prediction request failed: {error}")
        return {
            'success': False,
            'error': type(error).__name__,
            'message': str(error)
        }
