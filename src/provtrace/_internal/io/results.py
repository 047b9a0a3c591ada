"""Results file writer."""

import logging
from pathlib import Path
from typing import Optional, Union

from provtrace.config import RESULTS_FILENAME, resolve_save_dir

logger = logging.getLogger(__name__)


def save_results(lineage_text: str, save_dir: Optional[Union[str, Path]] = None) -> Path:
    """Write the report to prov-trace.txt in the resolved save directory."""
    target_dir = resolve_save_dir(save_dir)
    trace_file = target_dir / RESULTS_FILENAME
    trace_file.write_text(lineage_text, encoding="utf-8")
    logger.info("Saving results in %s", trace_file)
    return trace_file
