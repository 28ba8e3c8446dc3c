"""Tests for Canvas and image output."""

import pytest
from PIL import Image
from lumentrace.canvas import Canvas
from lumentrace.color import Color


class TestCanvas:
    """Test pixel access."""

    def test_creation(self):
        c = Canvas(10, 20)
        assert c.width == 10
        assert c.height == 20
        assert all(c.pixel_at(x, y) == Color(0, 0, 0) for x in range(10) for y in range(20))
        assert c.to_array().shape == (20, 10, 3)

    def test_write_pixel(self):
        c = Canvas(10, 20)
        red = Color(1, 0, 0)
        c.write_pixel(2, 3, red)
        assert c.pixel_at(2, 3) == red

    @pytest.mark.parametrize("x,y", [(-1, 0), (10, 0), (0, 20), (0, -1)])
    def test_out_of_bounds(self, x, y):
        c = Canvas(10, 20)
        with pytest.raises(IndexError):
            c.write_pixel(x, y, Color(1, 1, 1))
        with pytest.raises(IndexError):
            c.pixel_at(x, y)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Canvas(0, 5)


class TestPPM:
    """Test PPM serialization."""

    def test_header(self):
        lines = Canvas(5, 3).to_ppm().splitlines()
        assert lines[0:3] == ['P3', '5 3', '255']

    def test_pixel_data(self):
        c = Canvas(5, 3)
        c.write_pixel(0, 0, Color(1.5, 0, 0))
        c.write_pixel(2, 1, Color(0, 0.5, 0))
        c.write_pixel(4, 2, Color(-0.5, 0, 1))
        lines = c.to_ppm().splitlines()
        assert lines[3:6] == [
            '255 0 0 0 0 0 0 0 0 0 0 0 0 0 0',
            '0 0 0 0 0 0 0 128 0 0 0 0 0 0 0',
            '0 0 0 0 0 0 0 0 0 0 0 0 0 0 255',
        ]

    def test_long_lines_are_split(self):
        c = Canvas(10, 2)
        for y in range(2):
            for x in range(10):
                c.write_pixel(x, y, Color(1, 0.8, 0.6))
        lines = c.to_ppm().splitlines()
        assert lines[3:7] == [
            '255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204',
            '153 255 204 153 255 204 153 255 204 153 255 204 153',
            '255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204',
            '153 255 204 153 255 204 153 255 204 153 255 204 153',
        ]
        assert all(len(line) <= 70 for line in lines)

    def test_ends_with_newline(self):
        assert Canvas(5, 3).to_ppm().endswith('\n')


class TestSave:
    """Test writing images to disk."""

    def test_save_ppm(self, tmp_path):
        c = Canvas(2, 2)
        c.write_pixel(0, 0, Color(1, 0, 0))
        path = tmp_path / "out" / "image.ppm"
        c.save(path)
        assert path.read_text() == c.to_ppm()

    def test_save_png(self, tmp_path):
        c = Canvas(3, 2)
        c.write_pixel(1, 0, Color(0, 1, 0))
        path = tmp_path / "image.png"
        c.save(path)
        with Image.open(path) as img:
            assert img.size == (3, 2)
            assert img.getpixel((1, 0)) == (0, 255, 0)
            assert img.getpixel((0, 0)) == (0, 0, 0)

    def test_gamma(self):
        c = Canvas(1, 1)
        c.write_pixel(0, 0, Color(0.25, 0.25, 0.25))
        assert c.to_ldr(255, 2.0)[0, 0, 0] == 128
        assert c.to_ldr(255)[0, 0, 0] == 64
