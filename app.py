import streamlit as st
import pandas as pd

from microenvrf import InitializationError, SchemaError, Task, get_models
from microenvrf.main import build_results
from microenvrf.utils import load_sample_data

st.set_page_config(page_title="Tumor Microenvironment Classifier", layout="wide")


@st.cache_resource
def get_model_store():
    """Load both forests once per server process."""
    return get_models()


st.title("🧬 Tumor Microenvironment Classifier")

try:
    get_model_store()
except InitializationError as e:
    st.error(f"Models could not be loaded: {e}")
    st.stop()

uploaded_file = st.file_uploader("Upload a CSV of samples", type=["csv"])

if uploaded_file is not None:
    df = pd.read_csv(uploaded_file)
else:
    st.caption("No file uploaded, showing the bundled sample input.")
    df = load_sample_data()

task = st.radio(
    "Prediction task",
    [t.value for t in Task],
    format_func=lambda t: t.replace("_", " ").title(),
    horizontal=True,
)
show_probs = task == Task.DISEASE_STATUS.value and st.checkbox("Show class probabilities")

try:
    results, preds, _ = build_results(df, task, prob=show_probs)
except SchemaError as e:
    st.error(str(e))
    st.stop()
except ValueError as e:
    # e.g. non-numeric cells rejected by the forest
    st.error(f"Prediction failed: {e}")
    st.stop()

col1, col2 = st.columns([2, 1])

with col1:
    st.subheader("Predictions")
    st.dataframe(results)

with col2:
    st.subheader(f"{preds.name.replace('_', ' ')} Distribution")
    st.bar_chart(preds.value_counts())

st.download_button(
    "Download predictions",
    results.to_csv(index=False).encode("utf-8"),
    file_name="predictions.csv",
    mime="text/csv",
)
