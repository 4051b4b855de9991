import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from microenvrf import ml_utils
from microenvrf.train_model import make_synthetic_dataset, train_models
from microenvrf.utils import load_config

SMALL_TRAINING = {
    "n_samples_per_class": 60,
    "n_estimators": 20,
    "max_depth": 8,
    "random_state": 0,
    "test_size": 0.2,
    "compress": 3,
}


@pytest.fixture(scope="session")
def training_config():
    config = load_config()
    config["training"] = dict(SMALL_TRAINING)
    return config


@pytest.fixture(scope="session")
def model_paths(tmp_path_factory, training_config):
    df = make_synthetic_dataset(60, random_state=0)
    out_dir = tmp_path_factory.mktemp("models")
    return train_models(df, out_dir=out_dir, config=training_config)


@pytest.fixture
def models(model_paths, monkeypatch):
    """Install freshly loaded models as the shared store for one test."""
    monkeypatch.setattr(ml_utils, "_store", None)
    return ml_utils.init_models(*model_paths)


@pytest.fixture
def samples():
    return pd.DataFrame(
        {
            "Gene_E_Housekeeping": [10.1, 9.9, 10.4, 10.0, 9.7],
            "Gene_A_Oncogene": [9.4, 5.2, 4.9, 8.8, 5.1],
            "Gene_B_Immune": [4.6, 8.4, 5.1, 4.4, 8.9],
            "Gene_C_Stromal": [5.1, 4.9, 8.3, 5.2, 5.0],
            "Gene_D_Therapy": [7.8, 4.4, 4.0, 7.1, 3.7],
            "Pathway_Score_Inflam": [0.7, 2.2, 0.1, 0.9, 1.6],
        },
        index=[10, 11, 12, 13, 14],
    )
