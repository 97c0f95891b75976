#!/usr/bin/env python3
"""
Span Analysis

This script runs the span engine over a set of 3-vectors and target
vectors read from a YAML configuration file or the command line, logs a
summary, and optionally writes a JSON report.
"""

from __future__ import annotations

import argparse
import datetime
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from tqdm import tqdm

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from spanlab import analysis, evaluate, vectors as vecs


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[
        logging.StreamHandler(),
    ],
)
logger = logging.getLogger("analyze")


def load_config(config_path: Optional[str] = None) -> Dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    # Default config path
    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Configuration root must be a mapping.")

    # Empty sections load as None
    for section, default in (("tolerances", {}), ("vectors", []), ("targets", []), ("output", {})):
        if config.get(section) is None:
            config[section] = default
    return config


def parse_vectors(text: str) -> List[List[float]]:
    """Parse vectors written as ``"x,y,z;x,y,z"``.

    Args:
        text: Semicolon-separated triples of comma-separated numbers

    Returns:
        List of [x, y, z] lists
    """
    result = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = [p.strip() for p in chunk.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Expected 3 components in '{chunk}', got {len(parts)}")
        result.append([float(p) for p in parts])
    return result


def save_results(
    output_dir: str,
    result: analysis.SpanAnalysis,
    metrics: Optional[Dict] = None
) -> None:
    """Save the analysis report to the output directory.

    Args:
        output_dir: Path to output directory
        result: Finished span analysis
        metrics: Diagnostics (optional)
    """
    logger.info(f"Saving results to {output_dir}")
    os.makedirs(output_dir, exist_ok=True)

    report = result.to_dict()
    if metrics is not None:
        report["metrics"] = metrics

    report_file = os.path.join(output_dir, "report.json")
    with open(report_file, "w") as f:
        json.dump(report, f, indent=2)


def run_analysis(
    vector_list: List,
    target_list: List,
    config: Dict,
    output_dir: Optional[str] = None,
) -> Dict:
    """Run the span analysis.

    Args:
        vector_list: Vectors spanning the subspace
        target_list: Target vectors
        config: Configuration dictionary
        output_dir: Where to write report.json and log.txt (optional)

    Returns:
        Report dictionary including metrics
    """
    timer = evaluate.Timer("Analysis")
    timer.start()

    file_handler = None
    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(output_dir, "log.txt"))
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)

    tol = vecs.load_tolerances(config.get("tolerances"))
    metrics = evaluate.AnalysisMetrics()

    # === Stage 1: Vector set ===
    result = analysis.analyze(vector_list, tol=tol)
    timer.lap("vector_set")

    # === Stage 2: Targets ===
    for target in tqdm(target_list, desc="Analyzing targets", disable=len(target_list) < 2):
        result.targets.append(analysis.analyze_target(result.vectors, target, tol=tol))
    timer.lap("targets")

    for stage, time_s in timer.timings.items():
        metrics.update_stage_timing(stage, time_s)

    metrics.compute(result, tol)
    metrics.update("runtime_s", timer.elapsed)

    logger.info("\n" + result.summary())
    logger.info("\n" + metrics.summary())

    report = result.to_dict()
    report["metrics"] = metrics.to_dict()
    report["datetime"] = datetime.datetime.now().isoformat()

    if output_dir is not None and config.get("output", {}).get("save_report", True):
        save_results(output_dir, result, report["metrics"])

    if file_handler is not None:
        logging.getLogger().removeHandler(file_handler)
        file_handler.close()

    return report


def main():
    """Main function to parse arguments and run the analysis."""
    parser = argparse.ArgumentParser(description="Span analysis of 3-vectors")
    parser.add_argument(
        "--config", "-c", dest="config_path", default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--vectors", dest="vectors", default=None,
        help="Vectors as 'x,y,z;x,y,z' (overrides the configuration)"
    )
    parser.add_argument(
        "--targets", dest="targets", default=None,
        help="Target vectors as 'x,y,z;x,y,z' (overrides the configuration)"
    )
    parser.add_argument(
        "--output", "-o", dest="output_dir", default=None,
        help="Path to output directory"
    )
    parser.add_argument(
        "--verbose", "-v", dest="verbose", action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(args.config_path)

        vector_list = parse_vectors(args.vectors) if args.vectors is not None else config["vectors"]
        target_list = parse_vectors(args.targets) if args.targets is not None else config["targets"]
        output_dir = args.output_dir or config["output"].get("dir")

        run_analysis(
            vector_list,
            target_list,
            config,
            output_dir,
        )
    except Exception as e:
        logger.exception(f"Error running analysis: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
