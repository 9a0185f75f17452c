"""JSON export of a pipeline run.

The report is what a CI job archives next to its logs, so the output is
stable (sorted keys, fixed indentation) and diffable between runs.
"""

from __future__ import annotations

import json
from pathlib import Path

from athame.core.domain.models import PipelineReport


def export_report_json(report: PipelineReport, output_path: Path) -> Path:
    """Write `report` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    payload["ok"] = report.ok
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
