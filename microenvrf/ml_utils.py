import logging
import os
from dataclasses import dataclass
from enum import Enum

import joblib
import pandas as pd

from .errors import InitializationError
from .processing import (
    BASE_FEATURES,
    DISEASE_FEATURES,
    derive_disease_features,
    validate_columns,
)
from .utils import load_config, resolve_path

logger = logging.getLogger(__name__)

CELL_TYPE_LABELS = ("Cancer", "T_Cell", "Fibroblast")
DISEASE_STATUS_LABELS = ("Tumor", "Healthy_Control")


class Task(str, Enum):
    CELL_TYPE = "cell_type"
    DISEASE_STATUS = "disease_status"


class PredictMode(str, Enum):
    CLASS = "class"
    PROB = "prob"


@dataclass(frozen=True)
class ModelStore:
    cell_type_model: object
    disease_status_model: object


_store = None


def load_classification_model(model_path, feature_columns, labels):
    """
    Load a trained Random Forest and check it against the features and
    labels the predictors will use. Any problem is an InitializationError.
    """
    if not os.path.exists(model_path):
        raise InitializationError(
            f"Model file not found: {model_path}. "
            "Run `microenvrf-train` to build the bundled models."
        )

    try:
        model = joblib.load(model_path)
    except Exception as e:
        raise InitializationError(f"Could not load model {model_path}: {e}") from e

    for method in ("predict", "predict_proba"):
        if not callable(getattr(model, method, None)):
            raise InitializationError(
                f"{model_path} does not hold a classifier (no {method}())"
            )

    fitted_features = getattr(model, "feature_names_in_", None)
    if fitted_features is not None and list(fitted_features) != list(feature_columns):
        raise InitializationError(
            f"{model_path} was fit on features {list(fitted_features)}, "
            f"expected {list(feature_columns)}"
        )

    classes = getattr(model, "classes_", None)
    if classes is None or set(classes) != set(labels):
        raise InitializationError(
            f"{model_path} predicts classes {classes}, expected {sorted(labels)}"
        )

    logger.info("Loaded %s from %s", type(model).__name__, model_path)
    return model


def init_models(cell_type_path=None, disease_status_path=None, config=None):
    """
    Load both models and install them as the shared, read-only store.
    Paths default to those in the configuration.
    """
    global _store

    if cell_type_path is None or disease_status_path is None:
        paths = (config or load_config())["paths"]
        cell_type_path = cell_type_path or resolve_path(paths["cell_type_model"])
        disease_status_path = disease_status_path or resolve_path(
            paths["disease_status_model"]
        )

    _store = ModelStore(
        cell_type_model=load_classification_model(
            cell_type_path, BASE_FEATURES, CELL_TYPE_LABELS
        ),
        disease_status_model=load_classification_model(
            disease_status_path, DISEASE_FEATURES, DISEASE_STATUS_LABELS
        ),
    )
    return _store


def get_models():
    """
    The process-wide model store, loaded from the configured paths on first use.

    A broken artifact is only reported when the first prediction is made.
    Call init_models() at startup to fail before serving any request.
    """
    if _store is None:
        return init_models()
    return _store


def predict_cell_type(newdata):
    """
    Predict the microenvironment cell type (Cancer / T_Cell / Fibroblast)
    for every row of newdata.

    Returns a Series named Cell_Type, indexed like the input.
    """
    x = validate_columns(newdata, BASE_FEATURES)
    model = get_models().cell_type_model

    if x.empty:
        return pd.Series([], index=x.index, name="Cell_Type", dtype=object)

    preds = model.predict(x)
    return pd.Series(preds, index=x.index, name="Cell_Type")


def predict_disease_status(newdata, mode=PredictMode.CLASS):
    """
    Predict disease status (Tumor / Healthy_Control).

    Tumor_score, Immune_score and Stromal_score are derived from the base
    columns before the model is called.

    Args:
        newdata: table with the six base feature columns
        mode: "class" for a Series of labels, "prob" for a DataFrame of
              class probabilities (one column per class)
    """
    mode = PredictMode(mode)

    x = derive_disease_features(validate_columns(newdata, BASE_FEATURES))
    model = get_models().disease_status_model

    if x.empty:
        # scikit-learn rejects zero-row input
        if mode is PredictMode.CLASS:
            return pd.Series([], index=x.index, name="Disease_Status", dtype=object)
        return pd.DataFrame(columns=list(model.classes_), index=x.index, dtype=float)

    if mode is PredictMode.CLASS:
        return pd.Series(model.predict(x), index=x.index, name="Disease_Status")

    prob = model.predict_proba(x)
    return pd.DataFrame(prob, columns=list(model.classes_), index=x.index)


def predict_microenv(newdata, task=Task.CELL_TYPE):
    """
    Unified entry point. Returns class labels only, for either task.
    """
    task = Task(task)

    # Fail on the schema before choosing a model.
    validate_columns(newdata, BASE_FEATURES)

    if task is Task.CELL_TYPE:
        return predict_cell_type(newdata)
    return predict_disease_status(newdata, mode=PredictMode.CLASS)
