import os

import pytest


def pytest_configure(config):
    # Headless Qt for QImage-backed painter tests.
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required") and not os.getenv("PYQT_TESTS"):
        pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent compass test")
