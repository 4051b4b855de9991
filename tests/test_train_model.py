import joblib
import pytest

from microenvrf.errors import SchemaError
from microenvrf.processing import BASE_FEATURES, DISEASE_FEATURES
from microenvrf.train_model import main, make_synthetic_dataset, train_models


def test_synthetic_dataset_shape():
    df = make_synthetic_dataset(50, random_state=1)

    assert len(df) == 150
    assert set(BASE_FEATURES) <= set(df.columns)
    assert df["Cell_Type"].value_counts().to_dict() == {"Cancer": 50, "T_Cell": 50, "Fibroblast": 50}
    assert set(df["Disease_Status"]) == {"Tumor", "Healthy_Control"}


def test_synthetic_dataset_is_reproducible():
    a = make_synthetic_dataset(20, random_state=3)
    b = make_synthetic_dataset(20, random_state=3)
    assert a.equals(b)


def test_saved_models_fit_on_expected_features(model_paths):
    rf_celltype = joblib.load(model_paths[0])
    rf_disease = joblib.load(model_paths[1])

    assert list(rf_celltype.feature_names_in_) == BASE_FEATURES
    assert list(rf_disease.feature_names_in_) == DISEASE_FEATURES
    assert set(rf_celltype.classes_) == {"Cancer", "T_Cell", "Fibroblast"}
    assert set(rf_disease.classes_) == {"Tumor", "Healthy_Control"}


def test_train_from_csv(tmp_path):
    csv = tmp_path / "train.csv"
    make_synthetic_dataset(40, random_state=2).to_csv(csv, index=False)
    config = tmp_path / "config.yaml"
    config.write_text(
        "paths:\n"
        "  cell_type_model: unused.pkl\n"
        "  disease_status_model: unused.pkl\n"
        "training:\n"
        "  n_samples_per_class: 40\n"
        "  n_estimators: 10\n"
        "  max_depth: null\n"
        "  random_state: 0\n"
        "  test_size: 0.25\n"
        "  compress: 1\n"
    )

    main(["--csv", str(csv), "--out_dir", str(tmp_path / "models"), "--config", str(config)])

    assert (tmp_path / "models" / "rf_celltype.pkl").exists()
    assert (tmp_path / "models" / "rf_disease_status.pkl").exists()


def test_train_models_returns_paths(tmp_path, training_config):
    df = make_synthetic_dataset(30, random_state=4)
    paths = train_models(df, out_dir=tmp_path, config=training_config)
    assert all(p.exists() for p in paths)


def test_training_csv_missing_feature(tmp_path, training_config):
    df = make_synthetic_dataset(20, random_state=5).drop(columns=["Gene_C_Stromal"])

    with pytest.raises(SchemaError) as exc_info:
        train_models(df, out_dir=tmp_path, config=training_config)

    assert exc_info.value.missing == ["Gene_C_Stromal"]
    assert not (tmp_path / "rf_celltype.pkl").exists()
