"""Pipeline modules.

- orchestrator: Main run controller
- enrichment: Per-entity enrichment with failure isolation
- loader: Input CSV to TimeSeries, entity discovery
- writer: Result CSV
"""

from caseclimate.pipeline.orchestrator import PipelineOrchestrator
from caseclimate.pipeline.enrichment import EntityEnrichmentPipeline
from caseclimate.pipeline.loader import load_time_series, discover_entities
from caseclimate.pipeline.writer import write_results

__all__ = [
    "PipelineOrchestrator",
    "EntityEnrichmentPipeline",
    "load_time_series",
    "discover_entities",
    "write_results",
]
