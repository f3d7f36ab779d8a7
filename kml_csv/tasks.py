"""RQ task definitions for asynchronous conversions."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rq import get_current_job

from .config import STORAGE_PATHS
from .core import ConversionSummary
from .core.exceptions import ConversionError
from .pipelines import ConversionPipeline
from .services import render_preview
from .utils.io import ensure_directory, safe_filename

PREVIEW_ROW_LIMIT = 500


def process_conversion(*, conversion_id: str, upload_path: str, source_name: str) -> dict:
    """Convert an uploaded KML/KMZ file and write its CSV export."""

    job = get_current_job()
    if job:
        job.meta["progress"] = 0
        job.save_meta()

    created_at = datetime.utcnow()
    pipeline = ConversionPipeline.default()

    try:
        dataset = pipeline.run(source_name, Path(upload_path).read_bytes())
    except ConversionError as exc:
        if job:
            job.meta["error"] = exc.as_dict()
            job.save_meta()
        raise

    output_dir = ensure_directory(STORAGE_PATHS.outputs / conversion_id)
    stored_name = safe_filename(dataset.csv_filename) or "export.csv"
    csv_path = pipeline.serializer.export(dataset, output_dir / stored_name)

    if job:
        job.meta["progress"] = 100
        job.save_meta()

    summary = ConversionSummary(
        conversion_id=conversion_id,
        created_at=created_at,
        completed_at=datetime.utcnow(),
        source_name=source_name,
        csv_file=csv_path.name,
        columns=dataset.schema,
        row_count=len(dataset.rows),
        preview_html=render_preview(dataset.schema, dataset.rows, limit=PREVIEW_ROW_LIMIT),
        extras={"download_name": dataset.csv_filename},
    )
    return summary.as_dict()
