import struct

import pytest

from vgengine.fontatlas import (
    FontMetrics,
    atlas_layout,
    bmp_headers,
    read_font_metadata,
    write_atlas_bmp,
    write_font_metadata,
)


def test_metrics_wire_bytes():
    assert FontMetrics(4, 7, 14).to_bytes() == b"\x04\x07\x00\x0e\x00"


def test_metrics_round_trip():
    metrics = FontMetrics(4, 300, 513)
    assert FontMetrics.from_bytes(metrics.to_bytes()) == metrics


def test_metrics_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        FontMetrics.from_bytes(b"\x04\x07\x00")


@pytest.mark.parametrize("args", [(256, 1, 1), (1, 70000, 1), (1, 1, -1)])
def test_metrics_out_of_range(args):
    with pytest.raises(ValueError):
        FontMetrics(*args)


def test_metadata_file_round_trip(tmp_path):
    path = tmp_path / "Consolas8.font"
    metrics = FontMetrics(4, 9, 17)
    write_font_metadata(path, metrics)
    assert path.read_bytes() == metrics.to_bytes()
    assert read_font_metadata(path) == metrics


def test_layout_grid_is_square_and_minimal():
    layout = atlas_layout(9, 17, 94, 4)
    assert layout.row_count ** 2 >= 94
    assert (layout.row_count - 1) ** 2 < 94
    assert layout.padded_width == 9 + 2 * 4
    assert layout.padded_height == 17 + 2 * 4
    assert layout.width == layout.row_count * layout.padded_width
    assert layout.height == layout.row_count * layout.padded_height


def test_glyph_origins_inside_atlas_and_distinct():
    layout = atlas_layout(9, 17, 94, 4)
    origins = [layout.glyph_origin(i) for i in range(94)]
    assert origins[0] == (4, 4)
    assert len(set(origins)) == 94
    for x, y in origins:
        assert x + 9 + 4 <= layout.width
        assert y + 17 + 4 <= layout.height


def test_glyph_origin_next_row():
    layout = atlas_layout(9, 17, 94, 4)
    x, y = layout.glyph_origin(layout.row_count)
    assert x == 4
    assert y == layout.padded_height + 4


def test_glyph_origin_out_of_range():
    layout = atlas_layout(9, 17, 94, 4)
    with pytest.raises(IndexError):
        layout.glyph_origin(94)


def test_layout_rejects_no_glyphs():
    with pytest.raises(ValueError):
        atlas_layout(9, 17, 0, 4)


def test_bmp_headers_fields():
    headers = bmp_headers(12, 5)
    assert len(headers) == 14 + 40
    assert headers[:2] == b"BM"
    signature, file_size, _, _, offset = struct.unpack_from("<HIHHI", headers, 0)
    assert signature == 0x4D42
    assert offset == 54
    assert file_size == 54 + 12 * 5 * 4
    (size, width, height, planes, bits, compression) = struct.unpack_from("<IiiHHI", headers, 14)
    assert size == 40
    assert width == 12
    assert height == -5
    assert planes == 1
    assert bits == 32
    assert compression == 0


def test_write_atlas_bmp(tmp_path):
    path = tmp_path / "atlas.bmp"
    pixels = bytes(range(2 * 3 * 4))
    write_atlas_bmp(path, 2, 3, pixels)
    content = path.read_bytes()
    assert content == bmp_headers(2, 3) + pixels
    assert struct.unpack_from("<I", content, 2)[0] == len(content)


def test_write_atlas_bmp_overwrites(tmp_path):
    path = tmp_path / "atlas.bmp"
    path.write_bytes(b"x" * 500)
    write_atlas_bmp(path, 1, 1, b"\x00\x00\x00\x00")
    assert len(path.read_bytes()) == 54 + 4


def test_write_atlas_bmp_wrong_pixel_count(tmp_path):
    with pytest.raises(ValueError):
        write_atlas_bmp(tmp_path / "atlas.bmp", 2, 2, b"\x00" * 8)
    assert not (tmp_path / "atlas.bmp").exists()