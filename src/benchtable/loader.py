"""Load benchmark results written by the benchmark runner."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Union

from benchtable.errors import ResultsNotFound

logger = logging.getLogger(__name__)


def results_filename(package_name: str, rev: str) -> str:
    return f"results_{package_name}@{rev}.json"


def load_results(
    package_name: str,
    revs: Iterable[str],
    input_dir: Union[str, Path] = ".",
) -> Dict[str, dict]:
    """Load the JSON results of each revision.

    Args:
        package_name: Name of the benchmarked package
        revs: Revisions, in table column order
        input_dir: Directory holding results_<package>@<rev>.json files

    Returns:
        Dict[rev -> Dict[benchmark name -> stat]], in the order of `revs`
    """
    input_dir = Path(input_dir)
    combined_results = {}

    for rev in revs:
        results_file = input_dir / results_filename(package_name, rev)
        if not results_file.exists():
            raise ResultsNotFound(f"Results not found for {package_name}@{rev}: {results_file}")

        with open(results_file, encoding="utf-8") as f:
            combined_results[rev] = json.load(f)

        logger.info(f"Loaded {len(combined_results[rev])} benchmarks from {results_file}")

    return combined_results
