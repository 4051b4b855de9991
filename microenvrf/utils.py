import os
from pathlib import Path

import pandas as pd
import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG = PACKAGE_DIR / "config.yaml"
CONFIG_ENV_VAR = "MICROENVRF_CONFIG"


def load_config(config_path=None):
    """Load configuration from a YAML file ($MICROENVRF_CONFIG or the bundled config.yaml)."""
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG)
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f)


def resolve_path(path):
    """Relative paths in the config are taken relative to the package directory."""
    path = Path(path)
    if path.is_absolute():
        return path
    return PACKAGE_DIR / path


def read_input_table(csv_path):
    """Read a CSV of samples to predict on."""
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Input file not found: {csv_path}")
    return pd.read_csv(csv_path)


def load_sample_data(config=None):
    """The bundled demonstration input."""
    config = config or load_config()
    return read_input_table(resolve_path(config["paths"]["sample_data"]))


def create_output_dirs(base_output_dir):
    """Create the output directory and its plots/ subdirectory."""
    base = Path(base_output_dir)
    plots_dir = base / "plots"

    plots_dir.mkdir(parents=True, exist_ok=True)

    return base, plots_dir
