"""Top-level package for the KML/KMZ to CSV converter."""

from .api.app_factory import create_app
from .pipelines.conversion_pipeline import ConversionPipeline
from .session import ConversionSession

__all__ = ["create_app", "ConversionPipeline", "ConversionSession"]
