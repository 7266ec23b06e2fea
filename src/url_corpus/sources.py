"""
Data-source loading: flat-text record pools and the state/city CSV.

A declared source whose file does not exist loads as an empty pool, so it
simply contributes no URLs. Nothing here modifies the source files.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

import polars as pl

from .config import SourceConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoRecord:
    country: str
    state: str
    city: str


def load_source(name: str, path: Union[str, Path], header: bool = False) -> tuple[str, ...]:
    """
    Read one record per line from `path`.

    Parameters
    ----------
    name : str
        Source name, used only for logging.
    path : str | Path
        File to read.
    header : bool
        Drop the first line before collecting records.

    Returns
    -------
    tuple[str, ...]
        Records in file order. Empty lines are not records; record content is
        otherwise returned untrimmed. Empty when the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("Source '%s' unavailable: %s does not exist", name, path)
        return ()

    # Undecodable bytes become U+FFFD rather than failing the run
    lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    if header:
        lines = lines[1:]
    records = tuple(line for line in lines if line)
    logger.debug("Loaded %d records for source '%s' from %s", len(records), name, path)
    return records


def load_sources(
    sources: Mapping[str, SourceConfig], names: Optional[Iterable[str]] = None
) -> dict[str, tuple[str, ...]]:
    """
    Load declared sources into memory.

    Only `names` are loaded when given; a requested name with no declaration
    gets an empty pool.
    """
    wanted = list(sources) if names is None else list(dict.fromkeys(names))
    pools: dict[str, tuple[str, ...]] = {}
    for name in wanted:
        src = sources.get(name)
        if src is None:
            logger.warning("Source '%s' is not declared in the config", name)
            pools[name] = ()
            continue
        pools[name] = load_source(name, src.path, header=bool(src.header))
    return pools


def load_geo_records(
    path: Union[str, Path], country: str = "us", header: bool = True
) -> tuple[GeoRecord, ...]:
    """
    Read `state,city` rows from a CSV file.

    The first two columns are used whatever their header names; rows missing
    either value are skipped. Returns an empty tuple when the file is absent
    or has no rows.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("Geo source unavailable: %s does not exist", path)
        return ()
    if path.stat().st_size == 0:
        return ()

    # infer_schema_length=0 keeps every column as a string; extra fields are cut off
    df = pl.read_csv(
        path,
        has_header=header,
        infer_schema_length=0,
        truncate_ragged_lines=True,
        encoding="utf8-lossy",
    )
    if df.width < 2:
        logger.warning("Geo source %s needs state and city columns; got %s", path, df.columns)
        return ()

    state_col, city_col = df.columns[0], df.columns[1]
    df = df.select([state_col, city_col]).drop_nulls()

    records = tuple(
        GeoRecord(country=country, state=state, city=city)
        for state, city in df.iter_rows()
        if state and city
    )
    logger.debug("Loaded %d geo records from %s", len(records), path)
    return records


def distinct_states(records: Iterable[GeoRecord]) -> tuple[str, ...]:
    """States in order of first appearance."""
    return tuple(dict.fromkeys(r.state for r in records))
