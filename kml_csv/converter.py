"""Command line conversion of KML/KMZ files to CSV."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Sequence

from .config import CROSS_REFERENCE_CONFIG
from .core.exceptions import ConversionError
from .pipelines import ConversionPipeline
from .services import CrossReferenceBuilder, RowExtractor, SchemaUnifier, render_preview
from .session import ConversionSession

__all__ = ["convert_kml_to_csv", "main"]


LOGGER = logging.getLogger(__name__)


def convert_kml_to_csv(
    input_path: str | Path,
    *,
    csv_path: str | Path | None = None,
    preview_path: str | Path | None = None,
    pipeline: ConversionPipeline | None = None,
) -> Path:
    """Convert ``input_path`` to CSV and return the output path.

    The CSV is written next to the input as ``<stem>.csv`` unless
    ``csv_path`` is given.
    """

    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    pipeline = pipeline or ConversionPipeline.default()
    session = ConversionSession()
    session.load(pipeline, input_path.name, input_path.read_bytes())
    dataset = session.export()

    if csv_path is None:
        csv_path = input_path.with_name(dataset.csv_filename)
    output = pipeline.serializer.export(dataset, csv_path)

    if preview_path is not None:
        Path(preview_path).write_text(
            render_preview(dataset.schema, dataset.rows), encoding="utf-8"
        )
        LOGGER.info("Wrote preview to %s", preview_path)

    return output


def _pipeline_for(source_key: str | None, target_key: str | None) -> ConversionPipeline:
    pipeline = ConversionPipeline.default()
    if not source_key and not target_key:
        return pipeline

    config = dataclasses.replace(
        CROSS_REFERENCE_CONFIG,
        source_key=source_key or CROSS_REFERENCE_CONFIG.source_key,
        target_key=target_key or CROSS_REFERENCE_CONFIG.target_key,
    )
    pipeline.cross_reference = CrossReferenceBuilder(config)
    pipeline.extractor = RowExtractor(cross_reference=config)
    pipeline.unifier = SchemaUnifier(cross_reference=config)
    return pipeline


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export KML/KMZ placemarks to CSV.")
    parser.add_argument("input", help="Input .kml or .kmz file")
    parser.add_argument("csv", nargs="?", help="Output CSV path (defaults to the input name)")
    parser.add_argument("--preview", help="Optional path to save an HTML preview table")
    parser.add_argument(
        "--source-key",
        help=f"Field holding the reference source id (default {CROSS_REFERENCE_CONFIG.source_key})",
    )
    parser.add_argument(
        "--target-key",
        help=f"Field holding the reference target id (default {CROSS_REFERENCE_CONFIG.target_key})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    try:
        output = convert_kml_to_csv(
            args.input,
            csv_path=args.csv,
            preview_path=args.preview,
            pipeline=_pipeline_for(args.source_key, args.target_key),
        )
    except ConversionError as exc:
        LOGGER.error("%s", exc)
        return 1
    LOGGER.info("Wrote %s", output)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
