"""Exportación JSON del resultado de una ejecución.

- Artefacto estable para pipelines de CI (quién, qué job, cómo terminó).
"""

from __future__ import annotations

import json
from pathlib import Path

from icm_jobrunner.core.domain.models import JobRunResult


def export_run_result_json(*, result: JobRunResult, output_path: Path) -> Path:
    """Exporta `JobRunResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
