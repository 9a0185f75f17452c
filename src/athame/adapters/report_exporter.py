"""HTML rendering of a pipeline run (Jinja2)."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from athame.core.domain.models import PipelineReport

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_report_html(report: PipelineReport) -> str:
    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    tasks_total = sum(len(p.tasks) for p in report.phases)
    tasks_failed = sum(1 for p in report.phases for t in p.tasks if not t.ok)

    template = _get_env().get_template("run_report.html.j2")
    return template.render(
        report=report,
        generated_at=generated_at,
        tasks_total=tasks_total,
        tasks_failed=tasks_failed,
    )


def export_report_html(report: PipelineReport, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report_html(report), encoding="utf-8")
    return output_path
