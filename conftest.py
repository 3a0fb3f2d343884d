import sys
from pathlib import Path

import pytest

SRC = Path(__file__).parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _proj_database_available():
    """True if PROJ can resolve EPSG codes (its proj.db is installed and found)."""
    from pyproj import CRS
    from pyproj.exceptions import CRSError

    try:
        CRS.from_user_input("EPSG:4326")
    except CRSError:
        return False
    return True


def pytest_collection_modifyitems(config, items):
    """Skip tests that resolve real EPSG codes when the PROJ database is missing.

    Tests using fake converters and plain coordinate functions still run, so
    the traversal is covered even on machines without PROJ data.
    """
    if _proj_database_available():
        return

    proj_modules = ('test_converter.py', 'test_reproject.py')
    skip = pytest.mark.skip(reason="PROJ database (proj.db) not available")
    skipped = 0
    for item in items:
        if Path(str(item.fspath)).name not in proj_modules:
            continue
        if 'transform_with' in item.name:
            continue
        item.add_marker(skip)
        skipped += 1

    tr = config.pluginmanager.get_plugin('terminalreporter')
    if tr and skipped:
        tr.write_sep('-', f'Skipped {skipped} tests that need the PROJ database')
