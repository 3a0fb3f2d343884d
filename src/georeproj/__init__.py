"""Structure-preserving coordinate mapping and CRS reprojection for shapely geometries."""
from georeproj.geometry import shape_of
from georeproj.traversal import coord_count, iter_coords, map_coords, try_map_coords
from georeproj.reproject import ProjError, TransformError, UnknownCrs, transform, transform_with

__version__ = "0.1.0"
