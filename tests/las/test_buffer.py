"""Unit tests for the shared bounds checks."""

import pytest

from src.las.buffer import complete_records, fits, require
from src.las.errors import TruncatedHeaderError


class TestBuffer:
    """Test suite for buffer bounds helpers."""

    def test_fits(self):
        """Test region containment."""
        assert fits(10, 0, 10)
        assert fits(10, 4, 6)
        assert not fits(10, 4, 7)
        assert not fits(10, -1, 2)
        assert fits(0, 0, 0)

    def test_require_raises(self):
        """Test that a missing region raises with the byte counts."""
        with pytest.raises(TruncatedHeaderError) as info:
            require(100, 96, 8, region="core")

        assert info.value.required == 104
        assert info.value.available == 100
        assert "core" in str(info.value)

    def test_require_passes(self):
        """Test that an available region does not raise."""
        require(104, 96, 8)

    def test_complete_records(self):
        """Test counting whole records."""
        assert complete_records(227 + 3 * 20, 227, 20) == 3
        assert complete_records(227 + 3 * 20 - 1, 227, 20) == 2
        assert complete_records(227, 227, 20) == 0
        assert complete_records(100, 227, 20) == 0
        assert complete_records(500, 227, 0) == 0
