"""Basic tests for sendether."""

import sendether
from sendether import SendConfig, send_ether, to_smallest_unit


def test_import():
    """Test that imports work."""
    assert send_ether is not None
    assert SendConfig is not None
    assert to_smallest_unit is not None


def test_public_names_resolve():
    """Every name in __all__ is importable from the package."""
    for name in sendether.__all__:
        assert hasattr(sendether, name), name


def test_version():
    assert sendether.__version__ == "0.1.0"
