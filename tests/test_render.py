import pytest
from PIL import Image

from sticker_pipeline.errors import CompositionError
from sticker_pipeline.render import (
    FitPolicy,
    Gravity,
    compose_sticker,
    contain_size,
    derive_thumbnail,
    encode_png,
    gravity_offset,
    load_image,
    resize_contain,
    resize_cover,
)

from conftest import write_corrupt, write_image


def _alpha(img):
    return img.getchannel("A")


class TestContain:
    def test_wide_image_is_padded_top_and_bottom(self):
        src = Image.new("RGBA", (200, 100), (255, 0, 0, 255))

        out = resize_contain(src, (370, 320))

        assert out.size == (370, 320)
        left, top, right, bottom = _alpha(out).getbbox()
        # whole subject kept: full width, height scaled by 370/200
        assert (left, right) == (0, 370)
        assert bottom - top == 185
        assert out.getpixel((0, 0))[3] == 0
        assert out.getpixel((369, 319))[3] == 0
        assert out.getpixel((185, 160)) == (255, 0, 0, 255)

    def test_tall_image_is_padded_left_and_right(self):
        src = Image.new("RGB", (50, 200), (0, 0, 255))

        out = resize_contain(src, (240, 240))

        left, top, right, bottom = _alpha(out).getbbox()
        assert (top, bottom) == (0, 240)
        assert right - left == 60
        assert out.getpixel((0, 120))[3] == 0

    def test_same_aspect_has_no_padding(self):
        src = Image.new("RGBA", (740, 640), (0, 255, 0, 255))

        out = resize_contain(src, (370, 320))

        assert _alpha(out).getextrema() == (255, 255)


class TestCover:
    @pytest.mark.parametrize("src_size", [(200, 100), (50, 200), (96, 74), (10, 10)])
    def test_fills_target_without_padding(self, src_size):
        src = Image.new("RGB", src_size, (10, 20, 30))

        out = resize_cover(src, (96, 74))

        assert out.size == (96, 74)
        assert _alpha(out).getextrema() == (255, 255)

    def test_crops_around_center(self):
        src = Image.new("RGB", (300, 100), (255, 0, 0))
        src.paste((0, 0, 255), (100, 0, 200, 100))

        out = resize_cover(src, (100, 100))

        assert out.getpixel((50, 50)) == (0, 0, 255, 255)
        assert out.getpixel((5, 50)) == (0, 0, 255, 255)


@pytest.mark.parametrize(
    "gravity, expected",
    [
        (Gravity.SOUTH, (135, 270)),
        (Gravity.NORTH, (135, 0)),
        (Gravity.CENTER, (135, 135)),
        (Gravity.SOUTHEAST, (270, 270)),
        (Gravity.NORTHWEST, (0, 0)),
        (Gravity.WEST, (0, 135)),
    ],
)
def test_gravity_offset(gravity, expected):
    assert gravity_offset((370, 320), (100, 50), gravity) == expected


def test_compose_sticker_puts_text_at_the_bottom(tmp_path):
    base = write_image(tmp_path / "base.png", (100, 100), (0, 0, 255, 255))
    text = write_image(tmp_path / "text.png", (370, 40), (255, 0, 0, 255))

    sticker = compose_sticker(base, text, (370, 320))

    assert sticker.size == (370, 320)
    assert sticker.mode == "RGBA"
    assert sticker.getpixel((0, 0))[3] == 0
    assert sticker.getpixel((185, 100)) == (0, 0, 255, 255)
    assert sticker.getpixel((185, 300)) == (255, 0, 0, 255)
    assert sticker.getpixel((5, 300)) == (255, 0, 0, 255)


def test_compose_sticker_keeps_overlay_transparency(tmp_path):
    base = write_image(tmp_path / "base.png", (370, 320), (0, 0, 255, 255))
    text = write_image(tmp_path / "text.png", (100, 50), (255, 0, 0, 0))

    sticker = compose_sticker(base, text, (370, 320))

    assert sticker.getpixel((185, 300)) == (0, 0, 255, 255)


def test_compose_sticker_rejects_oversized_overlay(tmp_path):
    base = write_image(tmp_path / "base.png")
    text = write_image(tmp_path / "text.png", (400, 40))

    with pytest.raises(CompositionError) as excinfo:
        compose_sticker(base, text, (370, 320))

    assert excinfo.value.filename == "text.png"


def test_load_image_wraps_decode_errors(tmp_path):
    broken = write_corrupt(tmp_path / "broken.png")

    with pytest.raises(CompositionError) as excinfo:
        load_image(broken)
    assert excinfo.value.filename == "broken.png"

    with pytest.raises(CompositionError):
        load_image(tmp_path / "missing.png")


def test_derive_thumbnail_from_jpeg(tmp_path):
    src = write_image(tmp_path / "01.jpg", (370, 320), (200, 200, 0), fmt="JPEG")

    thumb = derive_thumbnail(src, (240, 240), FitPolicy.CONTAIN)

    assert thumb.size == (240, 240)
    assert thumb.getpixel((0, 0))[3] == 0


def test_encode_png_round_trip_size():
    data = encode_png(Image.new("RGBA", (96, 74), (0, 0, 0, 0)))

    assert data.startswith(b"\x89PNG\r\n\x1a\n")


@pytest.mark.parametrize(
    "source, expected",
    [((4000, 2), (370, 1)), ((2, 4000), (1, 320)), ((200, 100), (370, 185)), ((740, 640), (370, 320))],
)
def test_contain_size_never_collapses_to_zero(source, expected):
    assert contain_size(source, (370, 320)) == expected


def test_contain_and_cover_handle_extreme_aspect():
    src = Image.new("RGBA", (4000, 2), (255, 0, 0, 255))

    assert resize_contain(src, (370, 320)).size == (370, 320)
    assert resize_cover(src, (96, 74)).size == (96, 74)
