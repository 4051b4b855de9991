import argparse

import pandas as pd

from .ml_utils import PredictMode, Task, predict_disease_status, predict_microenv
from .utils import create_output_dirs, load_config, read_input_table, resolve_path
from .visualization import plot_prediction_counts, plot_probability_distribution


def build_results(df, task, prob=False):
    """
    Predict labels for task and join them (plus Prob_<class> columns when
    prob is set) onto the input rows. Returns (results, preds, probs).
    """
    preds = predict_microenv(df, task=task)
    results = df.assign(**{preds.name: preds})

    probs = None
    if prob:
        probs = predict_disease_status(df, mode=PredictMode.PROB)
        results = pd.concat([results, probs.add_prefix("Prob_")], axis=1)

    return results, preds, probs


def main(argv=None):
    parser = argparse.ArgumentParser(description="Tumor microenvironment Random Forest predictions")
    parser.add_argument("--input", type=str, help="CSV with the six feature columns", default=None)
    parser.add_argument("--output_dir", type=str, help="Output directory for results", default=None)
    parser.add_argument("--task", choices=[t.value for t in Task], default=Task.CELL_TYPE.value)
    parser.add_argument("--prob", action="store_true", help="Also write class probabilities (disease_status only)")
    parser.add_argument("--no_plots", action="store_true", help="Skip plot generation")
    args = parser.parse_args(argv)

    if args.prob and args.task != Task.DISEASE_STATUS.value:
        parser.error("--prob is only available for --task disease_status")

    # Load Config
    config = load_config()

    input_path = args.input if args.input else resolve_path(config['paths']['sample_data'])
    output_dir = args.output_dir if args.output_dir else resolve_path(config['paths']['output_dir'])

    base_out, plots_out = create_output_dirs(output_dir)

    print(f"Reading samples from {input_path}...")
    df = read_input_table(input_path)
    print(f"Found {len(df)} samples.")

    results, preds, probs = build_results(df, args.task, prob=args.prob)

    csv_path = base_out / "predictions.csv"
    results.to_csv(csv_path, index=False)
    print(f"Results saved to {csv_path}")

    print(f"\n{preds.name} counts:")
    print(preds.value_counts().to_string())

    if config['visualization']['save_plots'] and not args.no_plots:
        print("Generating plots...")
        plot_prediction_counts(preds, plots_out)
        if probs is not None:
            plot_probability_distribution(probs, plots_out)
        print("Done.")


if __name__ == "__main__":
    main()
