from resource_finder.services.pipeline import ResourcePipeline, get_resource_pipeline
from resource_finder.services.review_context import build_review_context

__all__ = [
    "ResourcePipeline",
    "get_resource_pipeline",
    "build_review_context",
]
