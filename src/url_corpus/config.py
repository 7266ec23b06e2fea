"""
Configuration loader & schema for the URL corpus generator.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Dict, Literal, Optional, Union

import yaml  # type: ignore
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from .errors import ConfigurationInvalid, ConfigurationMissing, CountMissing, ProfileInvalid

# Fraction of the requested total, as written in profiles
Pct = Annotated[float, Field(ge=0, le=1)]

DEFAULT_URL_FILE = Path("./urls.txt")


class SourceConfig(BaseModel):
    """A flat-text data source: one record per line."""

    path: Path = Field(..., description="Path to the source file")
    # None lets the loader decide: flat sources have no header, the geo CSV has one
    header: Optional[bool] = Field(
        None, description="Skip the first line of the file as a header row"
    )

    model_config = ConfigDict(extra="forbid")


class PercentageProfile(BaseModel):
    """
    Generic percentage policy.

    Each entry of `sourcePct` draws ceil(count * pct) distinct records from the
    named source and emits `hosts[host] + basePath + record`. Weights are
    independent and need not sum to 1.
    """

    type: Literal["percentage"] = "percentage"
    host: Optional[str] = Field(None, description="Alias into the hosts table")
    base_path: Optional[str] = Field(None, alias="basePath")
    source_pct: Dict[str, Pct] = Field(default_factory=dict, alias="sourcePct")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("source_pct", mode="before")
    @classmethod
    def _none_is_empty(cls, v):
        return {} if v is None else v


class GeoWeights(BaseModel):
    """Bucket weights for the geo/category policy; the four buckets should sum to 1."""

    state: Pct = 0.0
    city: Pct = 0.0
    geo_category: Pct = Field(0.0, alias="geoCategory")
    service_provider: Pct = Field(0.0, alias="serviceProvider")
    # Share of city and geo+category URLs using the country/state/city form
    full_geo: Pct = Field(0.0, alias="fullGeo")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def bucket_total(self) -> float:
        return self.state + self.city + self.geo_category + self.service_provider


class GeoCategoryProfile(BaseModel):
    """
    Geo/category policy.

    URLs are built under `hosts[host] + basePath` from a CSV of `state,city`
    rows, optionally suffixed with a random category, plus service-provider
    slugs and the distinct states.
    """

    type: Literal["geo_category"]
    host: Optional[str] = Field(None, description="Alias into the hosts table")
    base_path: Optional[str] = Field(None, alias="basePath")
    geo_source: Optional[str] = Field(None, alias="geoSource")
    category_source: Optional[str] = Field(None, alias="categorySource")
    service_provider_source: Optional[str] = Field(None, alias="serviceProviderSource")
    country: str = Field("us", min_length=1)
    add_base_urls: bool = Field(True, alias="addBaseUrls")
    pct: GeoWeights = Field(default_factory=GeoWeights)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


Profile = Annotated[
    Union[PercentageProfile, GeoCategoryProfile], Field(discriminator="type")
]


class Defaults(BaseModel):
    profile: Optional[str] = None
    count: Optional[int] = None

    model_config = ConfigDict(extra="forbid")


class GeneratorConfig(BaseModel):
    """
    Configuration for one URL generator installation.

    Attributes:
      url_file (Path): Output file, overwritten on every run.
      seed (Optional[int]): RNG seed for reproducible runs.
      sources (dict): Source name -> SourceConfig.
      hosts (dict): Host alias -> base URL (e.g. "http://al.dev").
      profiles (dict): Profile name -> PercentageProfile | GeoCategoryProfile.
      defaults (Defaults): Fallback profile name and count for the CLI.
    """

    url_file: Path = Field(DEFAULT_URL_FILE, alias="urlFile")
    seed: Optional[int] = Field(None, description="RNG seed for reproducibility")
    sources: Dict[str, SourceConfig] = Field(default_factory=dict)
    hosts: Dict[str, str] = Field(default_factory=dict)
    profiles: Dict[str, Profile] = Field(default_factory=dict)
    defaults: Defaults = Field(default_factory=Defaults)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("sources", mode="before")
    @classmethod
    def _expand_source_paths(cls, v):
        # `name: path/to/file` is shorthand for `name: {path: path/to/file}`
        if v is None:
            return {}
        if isinstance(v, dict):
            return {
                name: {"path": spec} if isinstance(spec, (str, Path)) else spec
                for name, spec in v.items()
            }
        return v

    @field_validator("profiles", mode="before")
    @classmethod
    def _default_profile_type(cls, v):
        if v is None:
            return {}
        if isinstance(v, dict):
            out = {}
            for name, spec in v.items():
                if isinstance(spec, dict) and "type" not in spec:
                    spec = {**spec, "type": "percentage"}
                out[name] = spec
            return out
        return v

    @field_validator("hosts", "defaults", mode="before")
    @classmethod
    def _none_section(cls, v):
        if v is None:
            return {}
        return v

    def with_base_dir(self, base_dir: Path) -> "GeneratorConfig":
        """Return a copy with relative output and source paths anchored at `base_dir`."""

        def anchor(p: Path) -> Path:
            return p if p.is_absolute() else base_dir / p

        sources = {
            name: src.model_copy(update={"path": anchor(src.path)})
            for name, src in self.sources.items()
        }
        return self.model_copy(
            update={"url_file": anchor(self.url_file), "sources": sources}
        )

    def host_url(self, alias: Optional[str]) -> Optional[str]:
        """Resolve a host alias to its base URL, or None when unknown or blank."""
        if not alias:
            return None
        return self.hosts.get(alias) or None


@dataclass(frozen=True)
class RunPlan:
    """The validated inputs of one generation run."""

    profile_name: str
    profile: Union[PercentageProfile, GeoCategoryProfile]
    count: int


def load_config(path: Path) -> GeneratorConfig:
    """
    Load and validate a GeneratorConfig from a YAML file.

    Parameters
    ----------
    path : Path
        Path to the YAML configuration. Relative source and output paths in
        the file are resolved against its directory.

    Returns
    -------
    GeneratorConfig
        Validated config object.

    Raises
    ------
    ConfigurationMissing
        If the YAML file does not exist.
    ConfigurationInvalid
        If the file is not YAML, or any field is missing or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationMissing(f"Missing config file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationInvalid(f"Cannot read config '{path}': {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationInvalid(f"Error parsing config '{path}':\n{e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationInvalid(
            f"Error parsing config '{path}': top level must be a mapping"
        )

    try:
        cfg = GeneratorConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clearer prefix
        raise ConfigurationInvalid(f"Error parsing config '{path}':\n{e}") from e
    return cfg.with_base_dir(path.parent)


def resolve_run(
    cfg: GeneratorConfig,
    profile_name: Optional[str] = None,
    count: Optional[int] = None,
) -> RunPlan:
    """
    Apply CLI values over the configured defaults and validate the result.

    Checks run in a fixed order so the first problem is the one reported:
    no profiles, no/unknown profile, missing host, missing basePath, no count.
    """
    name = profile_name if profile_name else cfg.defaults.profile
    total = count if count is not None else cfg.defaults.count

    if not cfg.profiles:
        raise ProfileInvalid("No profiles were loaded.")
    if not name:
        raise ProfileInvalid("No profile specified.")
    if name not in cfg.profiles:
        raise ProfileInvalid(f"Profile '{name}' not found.")

    profile = cfg.profiles[name]
    if not profile.host:
        raise ProfileInvalid(f"Profile '{name}' is missing the host param.")
    if not profile.base_path:
        raise ProfileInvalid(f"Profile '{name}' is missing the basePath param.")

    if not total or total <= 0:
        raise CountMissing("No URL count specified.")

    return RunPlan(profile_name=name, profile=profile, count=int(total))
