"""
Core URL-generation logic.

This module has NO output side-effects (no file writes, no printing). It
loads the sources a profile needs, samples them, assembles URLs in memory
and hands back a GenerationResult.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from numpy.random import Generator

from .assembler import GeoUrlAssembler, build_simple_url
from .config import GeneratorConfig, GeoCategoryProfile, PercentageProfile, RunPlan
from .sampler import choose_one, make_rng, sample_by_pct
from .sources import distinct_states, load_geo_records, load_source, load_sources

logger = logging.getLogger(__name__)

# Geo bucket weights further than this from 1 are reported
WEIGHT_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class GenerationResult:
    """All URLs of one run, in generation order."""

    profile_name: str
    urls: tuple[str, ...]
    # Candidates dropped by the assembler
    rejected: int = 0

    def __len__(self) -> int:
        return len(self.urls)


def generate_urls(
    cfg: GeneratorConfig, plan: RunPlan, rng: Optional[Generator] = None
) -> GenerationResult:
    """
    Build the full URL list for a validated run.

    Parameters
    ----------
    cfg : GeneratorConfig
        Loaded configuration (sources and hosts).
    plan : RunPlan
        Output of `config.resolve_run`.
    rng : numpy.random.Generator, optional
        Random source; defaults to one seeded from `cfg.seed`.

    Returns
    -------
    GenerationResult
    """
    if rng is None:
        rng = make_rng(cfg.seed)

    profile = plan.profile
    if cfg.host_url(profile.host) is None:
        logger.warning(
            "Host alias '%s' of profile '%s' is not in the hosts table; no URLs can be built",
            profile.host,
            plan.profile_name,
        )

    if isinstance(profile, GeoCategoryProfile):
        urls, rejected = _generate_geo_category(cfg, profile, plan.count, rng)
    else:
        urls, rejected = _generate_percentage(cfg, profile, plan.count, rng)

    logger.info(
        "Generated %d urls for profile '%s' (count=%d, rejected=%d)",
        len(urls),
        plan.profile_name,
        plan.count,
        rejected,
    )
    return GenerationResult(profile_name=plan.profile_name, urls=tuple(urls), rejected=rejected)


def _generate_percentage(
    cfg: GeneratorConfig, profile: PercentageProfile, count: int, rng: Generator
) -> tuple[list[str], int]:
    pools = load_sources(cfg.sources, profile.source_pct)
    urls: list[str] = []
    rejected = 0

    # Buckets run in the order the profile declares them
    for source, pct in profile.source_pct.items():
        records = sample_by_pct(pools[source], count, pct, rng)
        logger.info(
            "Source '%s': pct=%.4f drew %d of %d records", source, pct, len(records), len(pools[source])
        )
        for record in records:
            url = build_simple_url(cfg.hosts, profile.host, profile.base_path, record)
            if url is None:
                rejected += 1
                continue
            urls.append(url)
    return urls, rejected


def _flat_source(cfg: GeneratorConfig, name: Optional[str]) -> tuple[str, ...]:
    if not name:
        return ()
    src = cfg.sources.get(name)
    if src is None:
        logger.warning("Source '%s' is not declared in the config", name)
        return ()
    return load_source(name, src.path, header=bool(src.header))


def _generate_geo_category(
    cfg: GeneratorConfig, profile: GeoCategoryProfile, count: int, rng: Generator
) -> tuple[list[str], int]:
    weights = profile.pct
    total_weight = weights.bucket_total()
    if abs(total_weight - 1.0) > WEIGHT_SUM_TOLERANCE:
        logger.warning(
            "Geo bucket weights sum to %.4f, not 1 (state=%s city=%s geoCategory=%s serviceProvider=%s)",
            total_weight,
            weights.state,
            weights.city,
            weights.geo_category,
            weights.service_provider,
        )

    host_base = cfg.host_url(profile.host)
    if host_base is None:
        return [], 0

    geo = ()
    if profile.geo_source:
        src = cfg.sources.get(profile.geo_source)
        if src is None:
            logger.warning("Source '%s' is not declared in the config", profile.geo_source)
        else:
            header = True if src.header is None else src.header
            geo = load_geo_records(src.path, country=profile.country, header=header)
    states = distinct_states(geo)
    categories = _flat_source(cfg, profile.category_source)
    service_providers = _flat_source(cfg, profile.service_provider_source)

    assembler = GeoUrlAssembler(
        url_base=f"{host_base}{profile.base_path}",
        pct_full_geo=weights.full_geo,
        rng=rng,
    )

    urls: list[str] = []
    if profile.add_base_urls:
        urls.extend(assembler.base_urls(profile.country))

    # Weighted buckets share whatever the base URLs left over
    budget = count - len(urls)
    candidates: list[Optional[str]] = []

    sps = sample_by_pct(service_providers, budget, weights.service_provider, rng)
    candidates.extend(assembler.service_provider_url(sp) for sp in sps)

    picked_states = sample_by_pct(states, budget, weights.state, rng)
    candidates.extend(assembler.state_url(profile.country, s) for s in picked_states)

    cities = sample_by_pct(geo, budget, weights.city, rng)
    candidates.extend(assembler.city_url(g) for g in cities)

    geo_cats = sample_by_pct(geo, budget, weights.geo_category, rng)
    for g in geo_cats:
        candidates.append(assembler.geo_category_url(g, choose_one(categories, rng)))

    logger.info(
        "Geo buckets (budget=%d): serviceProvider=%d state=%d city=%d geoCategory=%d",
        budget,
        len(sps),
        len(picked_states),
        len(cities),
        len(geo_cats),
    )

    kept = [u for u in candidates if u is not None]
    urls.extend(kept)
    return urls, len(candidates) - len(kept)
