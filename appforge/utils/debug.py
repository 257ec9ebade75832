"""Debug dumps of generation run inputs and outputs."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from appforge.utils.logging import get_logger

logger = get_logger(__name__)

DEBUG_OUTPUT_DIR = Path(".debug")


def save_debug_data(
    run_id: str,
    stage: str,
    data: dict[str, Any],
    pretty: bool = True,
    base_dir: Path | None = None,
) -> Path:
    """Write ``data`` as JSON to ``<base_dir>/<run_id>/<stage>_<timestamp>.json``.

    Args:
        run_id: The generation run ID
        stage: Pipeline stage label (e.g. "blueprint", "result")
        data: JSON-serialisable payload; unknown types are stringified
        pretty: Whether to indent the JSON
        base_dir: Root directory, defaults to ``.debug``

    Returns:
        Path to the saved file
    """
    debug_dir = (base_dir or DEBUG_OUTPUT_DIR) / run_id
    debug_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
    filepath = debug_dir / f"{stage}_{timestamp}.json"

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2 if pretty else None, default=str)

    logger.info(
        "debug.data_saved",
        run_id=run_id,
        stage=stage,
        filepath=str(filepath),
    )

    return filepath


def save_run_debug(
    run_id: str,
    blueprint: dict[str, Any],
    summary: dict[str, Any],
    base_dir: Path | None = None,
) -> Path:
    """Save the blueprint and result summary of a finished run."""
    data = {
        "run_id": run_id,
        "saved_at": datetime.utcnow().isoformat(),
        "blueprint": blueprint,
        "summary": summary,
    }
    return save_debug_data(run_id, "run", data, base_dir=base_dir)
