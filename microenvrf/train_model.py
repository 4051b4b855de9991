import argparse
from pathlib import Path

import joblib
import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.metrics import accuracy_score, classification_report
from sklearn.model_selection import train_test_split

from .processing import BASE_FEATURES, derive_disease_features, validate_columns
from .utils import load_config, read_input_table, resolve_path

# Per-gene mean expression before cell-type and disease effects.
BASELINE = {
    "Gene_E_Housekeeping": 10.0,
    "Gene_A_Oncogene": 5.0,
    "Gene_B_Immune": 5.0,
    "Gene_C_Stromal": 5.0,
    "Gene_D_Therapy": 4.0,
    "Pathway_Score_Inflam": 0.0,
}

CELL_TYPE_SHIFT = {
    "Cancer": {"Gene_A_Oncogene": 3.0, "Gene_D_Therapy": 2.0},
    "T_Cell": {"Gene_B_Immune": 3.0, "Pathway_Score_Inflam": 1.5},
    "Fibroblast": {"Gene_C_Stromal": 3.0},
}

TUMOR_SHIFT = {
    "Gene_A_Oncogene": 1.0,
    "Gene_D_Therapy": 1.5,
    "Gene_B_Immune": -0.5,
    "Pathway_Score_Inflam": 0.8,
}


def make_synthetic_dataset(n_samples_per_class=300, random_state=42):
    """
    Synthetic expression table with Cell_Type and Disease_Status labels.
    Each cell type lifts its marker genes; tumor samples additionally lift
    the oncogene/therapy axis and inflammation.
    """
    rng = np.random.default_rng(random_state)
    frames = []

    for cell_type, shift in CELL_TYPE_SHIFT.items():
        n = n_samples_per_class
        is_tumor = rng.random(n) < 0.5
        data = {}
        for gene, base in BASELINE.items():
            sd = 0.5 if gene == "Pathway_Score_Inflam" else 1.0
            mean = base + shift.get(gene, 0.0) + is_tumor * TUMOR_SHIFT.get(gene, 0.0)
            data[gene] = rng.normal(mean, sd)
        data["Cell_Type"] = cell_type
        data["Disease_Status"] = np.where(is_tumor, "Tumor", "Healthy_Control")
        frames.append(pd.DataFrame(data))

    return pd.concat(frames, ignore_index=True)


def fit_forest(X, y, n_estimators=200, max_depth=15, random_state=42, test_size=0.2):
    """Fit a Random Forest on a train split and report accuracy on the held-out part."""
    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=test_size, random_state=random_state, stratify=y
    )

    clf = RandomForestClassifier(
        n_estimators=n_estimators,
        max_depth=max_depth,
        random_state=random_state,
        class_weight="balanced",
    )
    clf.fit(X_train, y_train)

    y_pred = clf.predict(X_test)
    acc = accuracy_score(y_test, y_pred)
    print(f"Model Accuracy: {acc:.2f}")
    print("\nClassification Report:")
    print(classification_report(y_test, y_pred))

    return clf


def train_models(df, out_dir=None, config=None):
    """
    Train the cell-type and disease-status forests on df and save them.
    Returns (cell_type_path, disease_status_path).
    """
    config = config or load_config()
    params = dict(config["training"])
    compress = params.pop("compress", 3)
    params.pop("n_samples_per_class", None)

    X = validate_columns(df, BASE_FEATURES)

    if out_dir is None:
        cell_type_path = resolve_path(config["paths"]["cell_type_model"])
        disease_path = resolve_path(config["paths"]["disease_status_model"])
    else:
        out_dir = Path(out_dir)
        cell_type_path = out_dir / "rf_celltype.pkl"
        disease_path = out_dir / "rf_disease_status.pkl"
    cell_type_path.parent.mkdir(parents=True, exist_ok=True)
    disease_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"Training cell type model on {len(df)} samples...")
    rf_celltype = fit_forest(X, df["Cell_Type"], **params)

    print(f"Training disease status model on {len(df)} samples...")
    rf_disease = fit_forest(derive_disease_features(X), df["Disease_Status"], **params)

    joblib.dump(rf_celltype, cell_type_path, compress=compress)
    joblib.dump(rf_disease, disease_path, compress=compress)
    print(f"Models saved to {cell_type_path} and {disease_path}")

    return cell_type_path, disease_path


def main(argv=None):
    parser = argparse.ArgumentParser(description="Train the microenvironment Random Forests")
    parser.add_argument("--csv", type=str, help="Labelled training CSV (default: synthetic data)", default=None)
    parser.add_argument("--out_dir", type=str, help="Where to write the models", default=None)
    parser.add_argument("--config", type=str, help="Config file", default=None)
    args = parser.parse_args(argv)

    config = load_config(args.config)

    if args.csv:
        print(f"Loading data from {args.csv}...")
        df = read_input_table(args.csv)
    else:
        print("Generating synthetic training data...")
        df = make_synthetic_dataset(
            config["training"]["n_samples_per_class"],
            random_state=config["training"]["random_state"],
        )

    train_models(df, out_dir=args.out_dir, config=config)


if __name__ == "__main__":
    main()
