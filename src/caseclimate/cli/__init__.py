"""Command-line interface modules for caseclimate pipeline execution.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from caseclimate.cli.run_enrichment import run_enrichment_pipeline, main

__all__ = ['run_enrichment_pipeline', 'main']
