"""
Data models for the waste generation forecasting core.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, Any, Mapping, Optional

from utils.exceptions import InvalidInputError


MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
               'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

# Observation fields that may be used as model inputs or correlated against waste
CORRELATION_FEATURES = ['population', 'income', 'rainfall', 'temperature', 'trucks', 'recycling']


# camelCase names used by the dashboard
FIELD_ALIASES = {
    'urbanArea': 'urban_area'
}


def normalize_field_names(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Map dashboard field names onto dataclass field names."""
    return {FIELD_ALIASES.get(key, key): value for key, value in fields.items()}


def month_name(month: int) -> str:
    """Short month label, falling back to the number for out-of-range months."""
    if 1 <= month <= 12:
        return MONTH_NAMES[month - 1]
    return str(month)


@dataclass
class Observation:
    """One synthetic monthly record of municipal features and waste tonnage."""
    id: int
    month: int
    year: int
    population: float  # people per km²
    income: float
    urban_area: float
    rainfall: float  # mm
    temperature: float  # °C
    trucks: int
    recycling: float  # percent
    waste: float  # tons, target variable

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_fields(cls, observation_id: int, fields: Mapping[str, Any]) -> 'Observation':
        """
        Build an observation from a field mapping, ignoring any id it carries.
        camelCase dashboard names are accepted; values are not range-checked.

        Raises:
            InvalidInputError: If a required field is missing
        """
        normalized = normalize_field_names(fields)
        names = [name for name in cls.__dataclass_fields__ if name != 'id']
        missing = [name for name in names if name not in normalized]
        if missing:
            raise InvalidInputError(f"Observation is missing fields: {', '.join(missing)}")

        return cls(id=observation_id, **{name: normalized[name] for name in names})


@dataclass
class StatisticsSnapshot:
    """Aggregate statistics over the current dataset."""
    total_records: int
    start_year: int
    end_year: int
    time_span: int
    avg_waste: float
    min_waste: float
    max_waste: float
    waste_range: float
    avg_population: float
    avg_income: float
    avg_rainfall: float
    avg_temperature: float


@dataclass
class ModelMetrics:
    """Simulated accuracy triple for a model variant."""
    rmse: float = 0.0
    mae: float = 0.0
    mape: float = 0.0

    @property
    def accuracy(self) -> float:
        """Accuracy percentage derived from MAPE."""
        return max(0.0, 100.0 - self.mape)

    def to_dict(self) -> Dict[str, float]:
        return {'rmse': self.rmse, 'mae': self.mae, 'mape': self.mape}


@dataclass
class PredictionInputs:
    """Feature vector for a single prediction request."""
    population: float = 8500
    income: float = 25000
    urban_area: float = 280
    rainfall: float = 150
    temperature: float = 28
    trucks: int = 45
    recycling: float = 18
    month: int = 1
    year: int = 2024

    @property
    def period_label(self) -> str:
        return f"{month_name(self.month)} {self.year}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PredictionRecord:
    """Entry in the prediction history."""
    inputs: PredictionInputs
    timestamp: datetime = field(default_factory=datetime.now)
    variant: Optional[str] = None  # None when all trained variants were queried
