"""Lookup table from source id to site implementation."""
from typing import Type

from ..config import SourceConfig
from ..utils.errors import UnknownSourceError
from .base import BaseSite
from .rfa import RFASite

SITES: dict[str, Type[BaseSite]] = {
    RFASite.source_id: RFASite,
}


def get_site(source: SourceConfig) -> BaseSite:
    """Build the site extractor registered for source.source_id."""
    try:
        site_cls = SITES[source.source_id]
    except KeyError:
        raise UnknownSourceError(source.source_id, list(SITES)) from None
    return site_cls(source)
