"""Random Forest predictors for tumor microenvironment cell type and disease status."""

from .errors import InitializationError, SchemaError
from .ml_utils import (
    PredictMode,
    Task,
    get_models,
    init_models,
    predict_cell_type,
    predict_disease_status,
    predict_microenv,
)
from .processing import BASE_FEATURES, DERIVED_FEATURES, derive_disease_features, validate_columns

__all__ = [
    "BASE_FEATURES",
    "DERIVED_FEATURES",
    "InitializationError",
    "PredictMode",
    "SchemaError",
    "Task",
    "derive_disease_features",
    "get_models",
    "init_models",
    "predict_cell_type",
    "predict_disease_status",
    "predict_microenv",
    "validate_columns",
]
