"""
Fatal error kinds raised before any URL is generated.

Missing source files and rejected URL candidates are not errors: they are
logged and the run continues.
"""

from __future__ import annotations


class UrlCorpusError(Exception):
    """Base class for errors that abort a generation run."""


class ConfigurationMissing(UrlCorpusError, FileNotFoundError):
    """The configuration file does not exist."""


class ConfigurationInvalid(UrlCorpusError, ValueError):
    """The configuration file is not valid YAML or violates the schema."""


class ProfileInvalid(UrlCorpusError, ValueError):
    """No usable profile: none loaded, unknown name, or missing host/basePath."""


class CountMissing(UrlCorpusError, ValueError):
    """No positive URL count was resolved from the CLI or the defaults."""
