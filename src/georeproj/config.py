# -*- coding: utf-8 -*-

"""
georeproj/config.py

This module centralizes the configuration used when resolving and running
coordinate converters. Keeping these values in one place means the facade,
the converter adapter and the tests all agree on axis order, error checking
and the numeric types a geometry may carry.

Contents:
---------
1. CONVERTER_OPTIONS:
   - Keyword arguments passed to `pyproj.Transformer.from_crs` for every
     converter built by `georeproj.converter.resolve`.
   - `always_xy=True` fixes the axis order to (x, y) = (longitude, latitude)
     or (easting, northing), whatever order the authority declares.

2. ERRCHECK:
   - Passed to `Transformer.transform`. When True, PROJ failures raise
     `pyproj.exceptions.ProjError` instead of returning `inf`.

3. SUPPORTED_DTYPES:
   - Floating point types accepted for coordinate arrays.

4. Well-known CRS identifiers (EPSG:4326, EPSG:3857).

Usage:
------
    from georeproj.config import CONVERTER_OPTIONS, WGS84, WEB_MERCATOR

"""
import numpy as np

# ───────────────────────────────────────────────────────────────────────────────
# 1) CONVERTER CONSTRUCTION
# ───────────────────────────────────────────────────────────────────────────────
CONVERTER_OPTIONS = {
    'always_xy': True,          # x = lon/easting, y = lat/northing
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) PER-COORDINATE CONVERSION
# ───────────────────────────────────────────────────────────────────────────────
ERRCHECK = True                 # raise on PROJ errors instead of returning inf

# ───────────────────────────────────────────────────────────────────────────────
# 3) NUMERIC TYPES
# ───────────────────────────────────────────────────────────────────────────────
SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))

# ───────────────────────────────────────────────────────────────────────────────
# 4) WELL-KNOWN CRS IDENTIFIERS
# ───────────────────────────────────────────────────────────────────────────────
WGS84 = "EPSG:4326"             # geographic lon/lat, degrees
WEB_MERCATOR = "EPSG:3857"      # pseudo-mercator, metres
