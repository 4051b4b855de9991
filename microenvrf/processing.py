import logging
from collections.abc import Mapping

import pandas as pd

from .errors import SchemaError

logger = logging.getLogger(__name__)

# Order matches the columns the forests were fit on.
BASE_FEATURES = [
    "Gene_E_Housekeeping",
    "Gene_A_Oncogene",
    "Gene_B_Immune",
    "Gene_C_Stromal",
    "Gene_D_Therapy",
    "Pathway_Score_Inflam",
]

DERIVED_FEATURES = ["Tumor_score", "Immune_score", "Stromal_score"]

DISEASE_FEATURES = BASE_FEATURES + DERIVED_FEATURES


def as_table(newdata):
    """Coerce a DataFrame, a column mapping, a single record or a list of records."""
    if isinstance(newdata, pd.DataFrame):
        return newdata
    if isinstance(newdata, Mapping) and not any(
        pd.api.types.is_list_like(v) for v in newdata.values()
    ):
        # A single record, e.g. {"Gene_A_Oncogene": 2.1, ...}
        return pd.DataFrame([newdata])
    return pd.DataFrame(newdata)


def validate_columns(newdata, required_columns=BASE_FEATURES):
    """
    Check that every required column is present and return a new frame holding
    exactly those columns, in the order given by required_columns.
    Extra columns are dropped. Raises SchemaError listing all missing names.
    """
    df = as_table(newdata)
    # Only the first of any repeated column name is used.
    df = df.loc[:, ~df.columns.duplicated()]
    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        logger.debug("Input rejected, missing columns: %s", missing)
        raise SchemaError(missing)

    return df.loc[:, list(required_columns)].copy()


def derive_disease_features(df):
    """
    Append the disease-status scores to a validated base-feature table:

        Tumor_score   = Gene_A_Oncogene + Gene_D_Therapy
        Immune_score  = Gene_B_Immune   + Pathway_Score_Inflam
        Stromal_score = Gene_C_Stromal

    The training script calls this same function, so the disease model always
    sees the features it was fit on. Returns a new frame; the input is untouched.
    """
    return df.assign(
        Tumor_score=df["Gene_A_Oncogene"] + df["Gene_D_Therapy"],
        Immune_score=df["Gene_B_Immune"] + df["Pathway_Score_Inflam"],
        Stromal_score=df["Gene_C_Stromal"],
    )
