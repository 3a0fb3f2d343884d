"""
geometry.py

The geometry variants understood by the coordinate traversal, and helpers
for describing them.

A geometry value is one of:
- a coordinate pair, `(x, y)` (a trailing z is allowed and carried through)
- a coordinate array, `numpy.ndarray` of shape (2,) or (N, 2) (or (N, 3))
- a shapely `Point`, `LineString`, `LinearRing` or `Polygon`
- a shapely `MultiPoint`, `MultiLineString` or `MultiPolygon`
- a shapely `GeometryCollection` of any of the above

Public functions:
- `shape_of(geom)` -> nested tuple describing variant, part and point counts
- `check_dtype(geom)` -> raises `TypeError` for non-float coordinate arrays

"""
from typing import Any, Tuple, Union
import numpy as np
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from georeproj.config import SUPPORTED_DTYPES

Coord = Tuple[float, float]
Geometry = Union[Coord, np.ndarray, BaseGeometry]

# Variant names, in the order they are documented above.
MULTI_TYPES = ('MultiPoint', 'MultiLineString', 'MultiPolygon')
COLLECTION_TYPES = ('GeometryCollection',)

CONSTRUCTORS = {
    'Point': Point,
    'LineString': LineString,
    'LinearRing': LinearRing,
    'Polygon': Polygon,
    'MultiPoint': MultiPoint,
    'MultiLineString': MultiLineString,
    'MultiPolygon': MultiPolygon,
    'GeometryCollection': GeometryCollection,
}


def is_coord_pair(obj: Any) -> bool:
    """True for a plain tuple holding two (or three) numbers."""
    if not isinstance(obj, tuple) or len(obj) not in (2, 3):
        return False
    return all(isinstance(v, (int, float, np.number)) and not isinstance(v, bool) for v in obj)


def is_coord_array(obj: Any) -> bool:
    """True for an ndarray of shape (2,), (3,), (N, 2) or (N, 3)."""
    if not isinstance(obj, np.ndarray):
        return False
    if obj.ndim == 1:
        return obj.shape[0] in (2, 3)
    return obj.ndim == 2 and obj.shape[1] in (2, 3)


def geometry_type(geom: Any) -> str:
    """Return the variant name of ``geom``.

    Shapely geometries report their own `geom_type`; coordinate pairs are
    ``Coord`` and coordinate arrays are ``CoordArray``. Anything else raises
    `TypeError`.
    """
    if isinstance(geom, BaseGeometry) and geom.geom_type in CONSTRUCTORS:
        return geom.geom_type
    if is_coord_pair(geom):
        return 'Coord'
    if is_coord_array(geom):
        return 'CoordArray'
    raise TypeError(f"unsupported geometry value of type {type(geom).__name__}")


def check_dtype(geom: Any) -> None:
    """Raise `TypeError` if ``geom`` carries a numeric type the converters can't handle.

    Shapely geometries always store float64. Coordinate arrays must be one of
    `SUPPORTED_DTYPES`, and coordinate pairs must not hold complex numbers.
    """
    if isinstance(geom, np.ndarray):
        if geom.dtype not in SUPPORTED_DTYPES:
            allowed = ', '.join(str(d) for d in SUPPORTED_DTYPES)
            raise TypeError(f"coordinate arrays must be one of {allowed}, got {geom.dtype}")
    elif isinstance(geom, tuple):
        if any(isinstance(v, (complex, np.complexfloating)) for v in geom):
            raise TypeError("coordinate pairs must hold real numbers")


def shape_of(geom: Any) -> tuple:
    """Describe the structure of ``geom`` without its coordinate values.

    Two geometries with equal `shape_of` have the same variant, the same
    number of parts and rings in the same order, and the same number of
    points in each. Examples::

        shape_of(Point(0, 0))                      -> ('Point', 1)
        shape_of(LineString([(0, 0), (1, 1)]))     -> ('LineString', 2)
        shape_of(square_with_hole)                 -> ('Polygon', 5, (5,))
        shape_of(np.zeros((4, 2), np.float32))     -> ('CoordArray', (4, 2), 'float32')
    """
    kind = geometry_type(geom)
    if kind == 'Coord':
        return (kind, len(geom))
    if kind == 'CoordArray':
        return (kind, geom.shape, str(geom.dtype))
    if kind == 'Polygon':
        if geom.is_empty:
            return (kind, 0, ())
        return (kind, len(geom.exterior.coords), tuple(len(r.coords) for r in geom.interiors))
    if kind in MULTI_TYPES or kind in COLLECTION_TYPES:
        return (kind, tuple(shape_of(part) for part in geom.geoms))
    return (kind, len(geom.coords))
