"""`caseclimate` - enrich per-country case counts with capital-city climate.

Subpackages:
- cache: Persistent key-value cache and cache-aside fetcher
- providers: Country metadata, geocoding and historical weather clients
- analysis: Growth-rate and weather aggregation
- pipeline: Loader, per-entity enrichment, orchestrator, writer
- schemas: Pydantic configuration layers
"""

__version__ = "0.1.0"
