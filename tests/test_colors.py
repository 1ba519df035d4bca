import numpy as np
import pytest

from covariate_map.colors import ColorScale, build_legend, default_palette, grey, legend_values


class TestColorScale:

    def test_default_palette_has_ten_steps(self):
        palette = default_palette()
        assert len(palette) == 10
        assert palette[0] == "#440154"  # viridis start
        assert palette[-1] == "#fde725"  # viridis end

    def test_endpoints_use_palette_ends(self):
        scale = ColorScale(0.0, 10.0)
        assert scale.color_for(0.0) == scale.palette[0]
        assert scale.color_for(10.0) == scale.palette[-1]

    def test_nan_and_out_of_domain_are_transparent(self):
        scale = ColorScale(0.0, 10.0)
        rgba = scale(np.array([[np.nan, -1.0], [5.0, 11.0]]))
        assert rgba.shape == (2, 2, 4)
        assert rgba.dtype == np.uint8
        assert rgba[0, 0, 3] == 0
        assert rgba[0, 1, 3] == 0
        assert rgba[1, 1, 3] == 0
        assert rgba[1, 0, 3] == 255
        assert scale.color_for(np.nan) is None
        assert scale.color_for(-0.5) is None

    def test_constant_domain_maps_to_one_color(self):
        scale = ColorScale(7.0, 7.0)
        rgba = scale(np.full((3, 3), 7.0))
        assert (rgba[..., 3] == 255).all()
        assert len({tuple(px) for px in rgba.reshape(-1, 4)}) == 1
        assert scale.color_for(7.0) == scale.palette[0]

    def test_non_finite_domain(self):
        with pytest.raises(ValueError):
            ColorScale(np.nan, np.nan)

    def test_custom_palette(self):
        scale = ColorScale(0.0, 1.0, palette=["#ff0000", "#0000ff"])
        assert scale.color_for(0.0) == "#ff0000"
        assert scale.color_for(1.0) == "#0000ff"


class TestLegend:

    def test_ten_rounded_non_decreasing_entries(self):
        entries = build_legend(ColorScale(0.123456, 9.87654321))
        values = [e.value for e in entries]
        assert len(entries) == 10
        assert values == [round(v, 3) for v in values]
        assert all(a <= b for a, b in zip(values, values[1:]))
        assert values[0] == 0.123
        assert values[-1] == 9.877

    def test_every_entry_has_a_color(self):
        for entry in build_legend(ColorScale(-3.0, 3.0)):
            assert entry.color is not None and entry.color.startswith("#")

    def test_constant_band(self):
        entries = build_legend(ColorScale(7.0, 7.0))
        assert [e.value for e in entries] == [7.0] * 10
        assert len({e.color for e in entries}) == 1

    def test_legend_values(self):
        assert legend_values(0.0, 9.0) == tuple(float(v) for v in range(10))


def test_grey():
    assert grey(0.0) == "#000000"
    assert grey(1.0) == "#ffffff"
    assert grey(0.4) == "#666666"
