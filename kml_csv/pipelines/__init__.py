"""Pipeline exports."""

from .conversion_pipeline import ConversionPipeline

__all__ = ["ConversionPipeline"]
