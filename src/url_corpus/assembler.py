"""
URL assembly from sampled records.

Builders return None instead of a malformed URL; callers drop those
candidates and keep going.
"""

from __future__ import annotations
import logging
from typing import Mapping, Optional

from numpy.random import Generator

from .sampler import is_full_geo
from .sources import GeoRecord

logger = logging.getLogger(__name__)

CATEGORY_SUFFIX = ".htm"


def build_simple_url(
    hosts: Mapping[str, str],
    host: Optional[str],
    base_path: Optional[str],
    record: Optional[str],
) -> Optional[str]:
    """
    `hosts[host] + base_path + record`, or None when any part is empty or the
    host alias is not in `hosts`.
    """
    if not record or not host or not base_path:
        logger.debug("Rejected candidate %r: empty host, basePath or record", record)
        return None
    base = hosts.get(host)
    if not base:
        logger.debug("Rejected candidate %r: unknown host alias %r", record, host)
        return None
    return f"{base}{base_path}{record}"


class GeoUrlAssembler:
    """
    Builds hierarchical URLs under a single `url_base`.

    Flat form is `url_base/<city>`, full-geo form is
    `url_base/<country>/<state>/<city>`; which one a record gets is decided
    per call by the full-geo die (see `sampler.is_full_geo`).
    """

    def __init__(self, url_base: str, pct_full_geo: float, rng: Generator):
        self.url_base = url_base
        self.pct_full_geo = pct_full_geo
        self.rng = rng

    def base_urls(self, country: str) -> list[str]:
        return [self.url_base, f"{self.url_base}/{country}"]

    def flat(self, geo: GeoRecord) -> str:
        return f"{self.url_base}/{geo.city}"

    def full_geo(self, geo: GeoRecord) -> str:
        return f"{self.url_base}/{geo.country}/{geo.state}/{geo.city}"

    def geo_url(self, geo: GeoRecord) -> str:
        if is_full_geo(self.pct_full_geo, self.rng):
            return self.full_geo(geo)
        return self.flat(geo)

    def city_url(self, geo: GeoRecord) -> Optional[str]:
        if not geo.city:
            return None
        return self.geo_url(geo)

    def geo_category_url(self, geo: GeoRecord, category: Optional[str]) -> Optional[str]:
        """Geo URL followed by `/<category>.htm`; None without a category."""
        if not geo.city or not category:
            logger.debug("Rejected geo+category candidate %r / %r", geo, category)
            return None
        return f"{self.geo_url(geo)}/{category}{CATEGORY_SUFFIX}"

    def state_url(self, country: str, state: str) -> Optional[str]:
        if not state:
            return None
        return f"{self.url_base}/{country}/{state}"

    def service_provider_url(self, slug: str) -> Optional[str]:
        if not slug:
            logger.debug("Rejected empty service-provider record")
            return None
        return f"{self.url_base}/{slug}"
