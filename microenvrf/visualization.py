import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path


def plot_prediction_counts(preds, output_dir):
    """Bar chart of how many samples fall in each predicted class."""
    output_dir = Path(output_dir)
    sns.set_theme(style="whitegrid")

    plt.figure(figsize=(8, 5))
    sns.countplot(x=preds.astype(str), order=sorted(preds.astype(str).unique()))
    plt.xlabel(preds.name or "Prediction")
    plt.title(f"Predicted {preds.name or 'class'} counts")
    out_path = output_dir / f"{(preds.name or 'prediction').lower()}_counts.png"
    plt.savefig(out_path)
    plt.close()
    return out_path


def plot_probability_distribution(probs, output_dir):
    """Histogram of the predicted probability of each disease-status class."""
    output_dir = Path(output_dir)
    sns.set_theme(style="whitegrid")

    long = probs.melt(var_name="Class", value_name="Probability")
    plt.figure(figsize=(8, 5))
    sns.histplot(data=long, x="Probability", hue="Class", bins=20, binrange=(0, 1), alpha=0.6)
    plt.title("Disease status class probabilities")
    out_path = output_dir / "disease_status_probabilities.png"
    plt.savefig(out_path)
    plt.close()
    return out_path
