"""
converter.py

Adapter over PROJ (through `pyproj`) for converting single coordinate
pairs between two coordinate reference systems.

Public API:
- `resolve(source_srs, target_srs)` -> `Converter` or None if either
  identifier is unknown
- `Converter.convert((x, y))` -> (x, y); raises `pyproj.exceptions.ProjError`

A converter is built for one (source, target) pair and is meant to be used
and closed by a single caller; nothing here caches converters.

"""
from typing import Optional, Tuple
import logging
import math

from pyproj import Transformer
from pyproj.exceptions import ProjError

from georeproj.config import CONVERTER_OPTIONS, ERRCHECK

logger = logging.getLogger(__name__)


class Converter:
    """Converts coordinate pairs from ``source_srs`` to ``target_srs``.

    Use as a context manager to release the underlying transformer::

        with resolve("EPSG:4326", "EPSG:3857") as conv:
            x, y = conv.convert((-36.508, -54.2815))
    """

    def __init__(self, transformer: Transformer, source_srs: str, target_srs: str):
        self._transformer = transformer
        self.source_srs = source_srs
        self.target_srs = target_srs

    def __repr__(self):
        state = 'closed' if self.closed else 'open'
        return f"Converter({self.source_srs!r} -> {self.target_srs!r}, {state})"

    @property
    def closed(self) -> bool:
        return self._transformer is None

    def convert(self, coord: Tuple[float, float]) -> Tuple[float, float]:
        """Convert one ``(x, y)`` pair.

        Raises `pyproj.exceptions.ProjError` when PROJ reports an error or
        produces a non-finite coordinate, and `RuntimeError` after `close`.
        """
        if self._transformer is None:
            raise RuntimeError(f"{self!r} used after close")
        x, y = coord
        out_x, out_y = self._transformer.transform(x, y, errcheck=ERRCHECK)
        if not (math.isfinite(out_x) and math.isfinite(out_y)):
            raise ProjError(f"non-finite result converting ({x}, {y}) from {self.source_srs} to {self.target_srs}")
        return out_x, out_y

    def close(self) -> None:
        self._transformer = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def resolve(source_srs: str, target_srs: str) -> Optional[Converter]:
    """Build a `Converter` for ``source_srs`` -> ``target_srs``.

    Identifiers are passed to PROJ untouched (``"EPSG:4326"``, a PROJ string,
    WKT, ...). Returns None when PROJ does not recognise either of them
    (`CRSError`) or cannot build a transformation between them.
    """
    try:
        transformer = Transformer.from_crs(source_srs, target_srs, **CONVERTER_OPTIONS)
    except ProjError as e:
        logger.debug('could not resolve %r -> %r: %s', source_srs, target_srs, e)
        return None
    logger.debug('created converter %r -> %r', source_srs, target_srs)
    return Converter(transformer, source_srs, target_srs)
