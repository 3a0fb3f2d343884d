"""
reproject.py

Reproject a geometry from one coordinate reference system to another.

Public API:
- `transform(geom, source_srs, target_srs)` -> geometry of the same variant
- `transform_with(geom, converter)` -> same, with a caller-owned converter
- `TransformError`, `UnknownCrs`, `ProjError`

Example::

    from shapely.geometry import Point
    p = transform(Point(-36.508, -54.2815), "EPSG:4326", "EPSG:3857")
    # p is approximately POINT (-4064052 -7223650)

Each `transform` call resolves and owns exactly one converter and closes it
before returning. Failures never produce a partially reprojected geometry.

"""
import logging
from typing import Any

from georeproj import converter as _converter
from georeproj.geometry import Geometry, check_dtype
from georeproj.traversal import try_map_coords
from georeproj.utils import describe, safe_log_exception

logger = logging.getLogger(__name__)


class TransformError(Exception):
    """Base class for reprojection failures."""


class UnknownCrs(TransformError):
    """Either CRS identifier could not be resolved; no coordinate was touched."""

    def __init__(self, source_srs: Any = None, target_srs: Any = None):
        self.source_srs = source_srs
        self.target_srs = target_srs
        super().__init__(source_srs, target_srs)

    def __str__(self):
        if self.source_srs is None and self.target_srs is None:
            return "Unknown CRS"
        return f"Unknown CRS: {self.source_srs!r} -> {self.target_srs!r}"


class ProjError(TransformError):
    """The converter failed on a coordinate. The inner exception is kept on `error`."""

    def __init__(self, error: BaseException):
        self.error = error
        super().__init__(error)

    def __str__(self):
        return str(self.error)


def transform_with(geom: Geometry, converter) -> Geometry:
    """Reproject ``geom`` with an already resolved ``converter``.

    ``converter`` is any object with a ``convert((x, y)) -> (x, y)`` method;
    the caller keeps ownership of it. Whatever ``convert`` raises is wrapped
    in `ProjError`.
    """
    check_dtype(geom)

    def convert(xy):
        try:
            return converter.convert(xy)
        except Exception as e:
            raise ProjError(e) from e

    try:
        return try_map_coords(geom, convert)
    except ProjError as e:
        safe_log_exception('coordinate conversion failed', e.error, level=logging.WARNING,
                           geometry=describe(geom), converter=converter)
        raise


def transform(geom: Geometry, source_srs: str, target_srs: str) -> Geometry:
    """Reproject ``geom`` from ``source_srs`` to ``target_srs``.

    Parameters:
    - geom: any geometry value from `georeproj.geometry`; float32 and float64
      coordinate arrays keep their dtype
    - source_srs, target_srs: CRS identifiers understood by PROJ, such as
      ``"EPSG:4326"``

    Returns a new geometry of the same variant and structure.

    Raises:
    - `UnknownCrs` if either identifier can't be resolved (before any
      coordinate is converted)
    - `ProjError` wrapping the first conversion failure
    - `TypeError` for unsupported geometry values or numeric types
    """
    check_dtype(geom)
    conv = _converter.resolve(source_srs, target_srs)
    if conv is None:
        raise UnknownCrs(source_srs, target_srs)
    with conv:
        return transform_with(geom, conv)
