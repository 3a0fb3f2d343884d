"""
traversal.py

Structure-preserving coordinate traversal. Every coordinate of a geometry
value is passed through a function and the same shape is rebuilt from the
results.

Public functions:
- `try_map_coords(geom, func)` -> new geometry; `func((x, y)) -> (x, y)` may raise
- `map_coords(geom, func)` -> same, for `func(x, y) -> (x, y)`
- `iter_coords(geom)` -> iterator over (x, y) pairs in traversal order

Traversal order is outer to inner, first part to last part, first point to
last point. A polygon visits its exterior ring, then its interior rings in
order. Closing coordinates of rings are stored coordinates and are visited.
The first exception raised by `func` propagates unchanged and stops the
traversal; no partially mapped geometry is ever returned.

"""
from typing import Any, Callable, Iterator, List, Sequence
import numpy as np
import shapely
from shapely.geometry import Point, Polygon

from georeproj.geometry import CONSTRUCTORS, Coord, Geometry, check_dtype, geometry_type

CoordFunc = Callable[[Coord], Coord]


def _map_pair(coord: Sequence[float], func: CoordFunc) -> tuple:
    """Map one stored coordinate, keeping any z component."""
    out = func((coord[0], coord[1]))
    try:
        x, y = out
    except (TypeError, ValueError):
        raise ValueError(f"coordinate function must return an (x, y) pair, got {out!r}") from None
    return (x, y) + tuple(coord[2:])


def _map_sequence(coords, func: CoordFunc) -> List[tuple]:
    return [_map_pair(c, func) for c in coords]


def _map_coord_array(arr: np.ndarray, func: CoordFunc) -> np.ndarray:
    # The copy keeps the input untouched and fixes the output dtype.
    out = np.array(arr, copy=True, order="C")
    rows = out.reshape(-1, out.shape[-1])
    for i in range(rows.shape[0]):
        x, y = _map_pair((float(rows[i, 0]), float(rows[i, 1])), func)
        rows[i, 0] = x
        rows[i, 1] = y
    return out


def _map_point(geom, func):
    return Point(_map_pair(geom.coords[0], func))


def _map_curve(geom, func):
    construct = geom.__class__
    return construct(_map_sequence(geom.coords, func))


def _map_polygon(geom, func):
    exterior = _map_sequence(geom.exterior.coords, func)
    interiors = [_map_sequence(ring.coords, func) for ring in geom.interiors]
    return Polygon(exterior, interiors)


def _map_parts(geom, func):
    if any(part.is_empty for part in geom.geoms):
        return _map_keeping_empty_parts(geom, func)
    construct = geom.__class__
    parts = [try_map_coords(part, func) for part in geom.geoms]
    return construct(parts)


def _map_keeping_empty_parts(geom, func):
    # Multi-part constructors reject or drop empty members, so the mapped
    # coordinates are written back into the existing structure instead.
    # get_coordinates walks parts, rings and points in traversal order.
    coords = shapely.get_coordinates(geom, include_z=geom.has_z)
    mapped = [_map_pair(tuple(float(v) for v in c), func) for c in coords]
    return shapely.set_coordinates(geom, np.asarray(mapped, dtype=float))


_HANDLERS = {
    'Coord': _map_pair,
    'CoordArray': _map_coord_array,
    'Point': _map_point,
    'LineString': _map_curve,
    'LinearRing': _map_curve,
    'Polygon': _map_polygon,
    'MultiPoint': _map_parts,
    'MultiLineString': _map_parts,
    'MultiPolygon': _map_parts,
    'GeometryCollection': _map_parts,
}


def try_map_coords(geom: Geometry, func: CoordFunc) -> Geometry:
    """Apply ``func`` to every coordinate of ``geom`` and rebuild the same shape.

    Parameters:
    - geom: any geometry value listed in `georeproj.geometry`
    - func: called once per coordinate with an ``(x, y)`` tuple, returns the
      new ``(x, y)``. It may raise to abort the traversal.

    Returns a new geometry of the same variant with the same part, ring and
    point counts in the same order. Empty geometries come back as new empty
    geometries of the same variant without calling ``func``.
    Empty members of multi-part geometries keep their place.

    Rings are rebuilt from the mapped coordinates as given. If ``func`` maps
    a ring's closing coordinate somewhere other than its first coordinate,
    shapely closes the ring again and it gains a point.

    Raises whatever ``func`` raises first, `TypeError` for unsupported
    values or non-float coordinate arrays, and `ValueError` if ``func``
    returns something other than a pair.
    """
    kind = geometry_type(geom)
    if kind == 'CoordArray':
        check_dtype(geom)
    if kind in CONSTRUCTORS and geom.is_empty:
        return CONSTRUCTORS[kind]()
    return _HANDLERS[kind](geom, func)


def map_coords(geom: Geometry, func: Callable[[float, float], Coord]) -> Geometry:
    """Like `try_map_coords`, for a function taking x and y as two arguments.

    This is the calling convention of `shapely.ops.transform`::

        map_coords(line, lambda x, y: (x + 1.0, y + 1.0))
    """
    return try_map_coords(geom, lambda xy: func(xy[0], xy[1]))


def iter_coords(geom: Geometry) -> Iterator[Coord]:
    """Iterate over the ``(x, y)`` pairs of ``geom`` in traversal order."""
    seen: List[Coord] = []

    def record(xy: Coord) -> Coord:
        seen.append(xy)
        return xy

    try_map_coords(geom, record)
    return iter(seen)


def coord_count(geom: Any) -> int:
    """Number of coordinates `try_map_coords` would visit in ``geom``."""
    return sum(1 for _ in iter_coords(geom))
