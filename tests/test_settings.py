"""Tests for RenderSettings."""

import pytest
import math
from lumentrace.settings import RenderSettings


class TestRenderSettings:
    """Test RenderSettings defaults and validation."""

    def test_defaults(self):
        s = RenderSettings()
        assert s.width == 400
        assert s.height == 200
        assert s.field_of_view == pytest.approx(math.pi / 3)
        assert s.max_depth == 5
        assert s.gamma == 1.0

    @pytest.mark.parametrize("kwargs", [
        {'width': 0},
        {'height': -1},
        {'max_depth': -1},
        {'field_of_view': 0},
        {'field_of_view': math.pi},
        {'gamma': 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)

    def test_zero_depth_allowed(self):
        assert RenderSettings(max_depth=0).max_depth == 0
