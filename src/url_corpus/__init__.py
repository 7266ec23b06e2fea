"""
Synthetic URL corpus generator.

Samples records from flat-text data sources according to per-profile
percentage weights and formats them into URLs for load-testing traffic.
The CLI entry point lives in `url_corpus.cli`.
"""

__all__: list[str] = []
