import logging
import math

import numpy as np
import pytest
from shapely.geometry import LineString, Point

from georeproj import reproject
from georeproj.config import WEB_MERCATOR, WGS84
from georeproj.geometry import shape_of
from georeproj.reproject import ProjError, TransformError, UnknownCrs, transform, transform_with
from georeproj.tests.fixtures.geometries import ConversionFailed, Recorder, all_variants, path_and_area


class FakeConverter:
    """Converter stand-in that delegates to a `Recorder` and tracks closing."""

    def __init__(self, recorder):
        self.recorder = recorder
        self.closed = False

    def convert(self, xy):
        return self.recorder(xy)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False


def test_point_to_web_mercator():
    out = transform(Point(-36.508, -54.2815), WGS84, WEB_MERCATOR)
    assert out.geom_type == 'Point'
    assert math.isclose(out.x, -4064052.0, abs_tol=1.0)
    assert math.isclose(out.y, -7223650.5, abs_tol=1.0)


def test_float32_array_to_web_mercator():
    arr = np.array([-36.508, -54.2815], dtype=np.float32)
    out = transform(arr, WGS84, WEB_MERCATOR)
    assert out.dtype == np.float32
    assert np.allclose(out, np.array([-4064052.0, -7223650.5], dtype=np.float32), rtol=0, atol=1.0)


def test_round_trip_keeps_structure():
    geom = path_and_area()
    there = transform(geom, WGS84, WEB_MERCATOR)
    back = transform(there, WEB_MERCATOR, WGS84)
    assert shape_of(there) == shape_of(geom)
    assert back.equals_exact(geom, 1e-6)


@pytest.mark.parametrize('source, target', [
    ('not-a-real-crs', WGS84),
    (WGS84, 'not-a-real-crs'),
])
def test_unknown_crs_before_traversal(monkeypatch, source, target):
    calls = []

    def spy(geom, func):
        calls.append(geom)
        raise AssertionError('traversal should not run')

    monkeypatch.setattr(reproject, 'try_map_coords', spy)
    with pytest.raises(UnknownCrs) as excinfo:
        transform(LineString([(0, 0), (1, 1)]), source, target)
    assert calls == []
    assert isinstance(excinfo.value, TransformError)
    assert 'Unknown CRS' in str(excinfo.value)
    assert excinfo.value.source_srs == source


def test_unknown_crs_message_without_identifiers():
    assert str(UnknownCrs()) == 'Unknown CRS'


def test_conversion_failure_wrapped(caplog):
    with caplog.at_level(logging.WARNING):
        with pytest.raises(ProjError) as excinfo:
            transform(LineString([(0.0, 0.0), (0.0, 90.0), (1.0, 1.0)]), WGS84, WEB_MERCATOR)
    err = excinfo.value
    assert isinstance(err, TransformError)
    assert err.__cause__ is err.error
    assert str(err) == str(err.error)
    assert 'coordinate conversion failed' in caplog.text


def test_converter_closed_on_success_and_failure(monkeypatch):
    made = []

    def fake_resolve(source, target):
        conv = FakeConverter(Recorder(fail_on={(1.0, 1.0)}))
        made.append(conv)
        return conv

    monkeypatch.setattr(reproject._converter, 'resolve', fake_resolve)
    transform(Point(5.0, 5.0), 'a', 'b')
    with pytest.raises(ProjError):
        transform(Point(1.0, 1.0), 'a', 'b')
    assert len(made) == 2
    assert all(c.closed for c in made)


def test_transform_with_stops_at_first_failure():
    rec = Recorder(fail_on={(1.0, 1.0), (2.0, 2.0)})
    line = LineString([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])
    with pytest.raises(ProjError) as excinfo:
        transform_with(line, FakeConverter(rec))
    assert isinstance(excinfo.value.error, ConversionFailed)
    assert excinfo.value.error.xy == (1.0, 1.0)
    assert rec.calls == [(0.0, 0.0), (1.0, 1.0)]


@pytest.mark.parametrize('name', sorted(all_variants()))
def test_transform_with_every_variant(name):
    geom = all_variants()[name]
    out = transform_with(geom, FakeConverter(Recorder(shift=(1.0, 1.0))))
    assert shape_of(out) == shape_of(geom)


def test_integer_array_rejected():
    with pytest.raises(TypeError):
        transform(np.array([[1, 2]]), WGS84, WEB_MERCATOR)


def test_unsupported_geometry_not_wrapped():
    with pytest.raises(TypeError):
        transform_with('POINT (0 0)', FakeConverter(Recorder()))
