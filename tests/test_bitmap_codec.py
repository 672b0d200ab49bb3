import io
import os
import stat
import struct

import pytest
from PIL import Image

from bmpmark.bitmap import codec
from bmpmark.bitmap.types import BLACK, WHITE, PixelBuffer, Rgba
from bmpmark.errors import FormatError

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
GRAY = (10, 20, 30)
WHITE_RGB = (255, 255, 255)


def test_load_all_black_24bit(write_bmp, solid):
    buffer = codec.load(write_bmp(solid(4, 4)))
    assert (buffer.width, buffer.height) == (4, 4)
    assert buffer.samples == [Rgba(0, 0, 0, 255)] * 16


def test_load_flips_bottom_up_rows(write_bmp):
    rows = [[RED, GREEN], [BLUE, GRAY]]
    buffer = codec.load(write_bmp(rows))
    assert buffer.get(0, 0) == Rgba(*RED)
    assert buffer.get(1, 0) == Rgba(*GREEN)
    assert buffer.get(0, 1) == Rgba(*BLUE)
    assert buffer.get(1, 1) == Rgba(*GRAY)


def test_load_skips_row_padding(write_bmp):
    rows = [[RED, GREEN, BLUE], [GRAY, WHITE_RGB, RED], [BLUE, BLUE, GREEN]]
    buffer = codec.load(write_bmp(rows))
    assert len(buffer.samples) == 9
    assert [buffer.get(x, 1) for x in range(3)] == [Rgba(*GRAY), Rgba(*WHITE_RGB), Rgba(*RED)]
    assert buffer.get(2, 2) == Rgba(*GREEN)


def test_load_32bit_keeps_alpha(write_bmp):
    rows = [[(1, 2, 3, 4), (5, 6, 7, 8)]]
    buffer = codec.load(write_bmp(rows, bit_count=32))
    assert buffer.samples == [Rgba(1, 2, 3, 4), Rgba(5, 6, 7, 8)]


def test_load_honors_declared_pixel_offset(write_bmp):
    rows = [[RED], [GREEN]]
    buffer = codec.load(write_bmp(rows, offset=70))
    assert buffer.samples == [Rgba(*RED), Rgba(*GREEN)]


def test_read_bitmap_from_stream(make_bmp):
    buffer = codec.read_bitmap(io.BytesIO(make_bmp([[GRAY, RED]])))
    assert buffer.samples == [Rgba(*GRAY), Rgba(*RED)]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"signature": b"PK"},
        {"header_bit_count": 8},
        {"header_bit_count": 16},
        {"compression": 1},
        {"width": 0},
        {"height": 0},
        {"height": -2},
        {"offset": 30},
        {"truncate": 5},
    ],
)
def test_load_rejects_invalid_files(write_bmp, solid, kwargs):
    with pytest.raises(FormatError):
        codec.load(write_bmp(solid(2, 2), **kwargs))


def test_load_rejects_non_bitmap(tmp_path):
    path = tmp_path / "notes.bmp"
    path.write_bytes(b"hello, world")
    with pytest.raises(FormatError, match="Not a recognized bitmap"):
        codec.load(str(path))


def test_load_missing_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        codec.load(str(tmp_path / "missing.bmp"))


def test_read_info(write_bmp, solid):
    info = codec.read_info(write_bmp(solid(3, 2), bit_count=32))
    assert info.info_header.width == 3
    assert info.info_header.bit_count == 32
    assert info.stride == 12


def test_encode_layout():
    buffer = PixelBuffer(3, 2, [Rgba(1, 2, 3)] * 3 + [Rgba(4, 5, 6)] * 3)
    data = codec.encode_bitmap(buffer)
    assert len(data) == 54 + 12 * 2
    signature, file_size, _, _, offset = struct.unpack_from("<2sIHHI", data, 0)
    assert (signature, file_size, offset) == (b"BM", 78, 54)
    fields = struct.unpack_from("<IiiHHIIiiII", data, 14)
    assert fields == (40, 3, 2, 1, 24, 0, 24, 0, 0, 0, 0)
    # bottom row first, B G R order, three padding bytes
    assert data[54:66] == bytes([6, 5, 4] * 3) + bytes(3)
    assert data[66:78] == bytes([3, 2, 1] * 3) + bytes(3)


def test_round_trip_24bit(write_bmp, tmp_path):
    rows = [[RED, GREEN, BLUE, GRAY, WHITE_RGB], [GRAY, GRAY, RED, BLUE, GREEN]]
    original = codec.load(write_bmp(rows))
    out = str(tmp_path / "out.bmp")
    codec.save(out, original)
    assert codec.load(out) == original


def test_round_trip_drops_alpha(write_bmp, tmp_path):
    original = codec.load(write_bmp([[(1, 2, 3, 0), (9, 8, 7, 128)]], bit_count=32))
    out = str(tmp_path / "out.bmp")
    codec.save(out, original)
    reloaded = codec.load(out)
    assert reloaded.samples == [Rgba(1, 2, 3, 255), Rgba(9, 8, 7, 255)]
    assert codec.read_info(out).info_header.bit_count == 24


def test_save_is_readable_by_pillow(tmp_path):
    buffer = PixelBuffer.create(5, 3, BLACK)
    buffer.set(4, 0, WHITE)
    buffer.set(0, 2, Rgba(200, 100, 50))
    out = tmp_path / "out.bmp"
    codec.save(str(out), buffer)
    with Image.open(out) as img:
        assert img.size == (5, 3)
        rgb = img.convert("RGB")
        assert rgb.getpixel((4, 0)) == (255, 255, 255)
        assert rgb.getpixel((0, 2)) == (200, 100, 50)
        assert rgb.getpixel((2, 1)) == (0, 0, 0)


def test_save_leaves_no_temporary_files(tmp_path):
    codec.save(str(tmp_path / "out.bmp"), PixelBuffer.create(2, 2))
    assert os.listdir(tmp_path) == ["out.bmp"]


def test_save_replaces_existing_file(tmp_path):
    out = tmp_path / "out.bmp"
    out.write_bytes(b"old contents")
    codec.save(str(out), PixelBuffer.create(1, 1, WHITE))
    assert codec.load(str(out)).samples == [WHITE]


def test_save_into_missing_directory_fails(tmp_path):
    with pytest.raises(OSError):
        codec.save(str(tmp_path / "missing" / "out.bmp"), PixelBuffer.create(1, 1))
    assert os.listdir(tmp_path) == []


def test_save_rejects_inconsistent_buffer(tmp_path):
    buffer = PixelBuffer.create(2, 2)
    buffer.samples.pop()
    with pytest.raises(ValueError):
        codec.save(str(tmp_path / "out.bmp"), buffer)
    assert os.listdir(tmp_path) == []


def test_write_bitmap_to_stream():
    stream = io.BytesIO()
    buffer = PixelBuffer(1, 2, [WHITE, BLACK])
    codec.write_bitmap(stream, buffer)
    assert stream.getvalue() == codec.encode_bitmap(buffer)
    stream.seek(0)
    assert codec.read_bitmap(stream) == buffer


@pytest.mark.parametrize("width,height,bit_count", [(1, 200_000_000, 24), (2**31 - 1, 1, 32)])
def test_load_rejects_dimensions_larger_than_file(tmp_path, width, height, bit_count):
    header = struct.pack("<2sIHHI", b"BM", 58, 0, 0, 54) + struct.pack(
        "<IiiHHIIiiII", 40, width, height, 1, bit_count, 0, 0, 0, 0, 0, 0
    )
    path = tmp_path / "huge.bmp"
    path.write_bytes(header + bytes(4))
    assert path.stat().st_size == 58
    with pytest.raises(FormatError, match="Truncated pixel data"):
        codec.load(str(path))


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
def test_save_follows_umask(tmp_path, umask_022):
    out = tmp_path / "out.bmp"
    codec.save(str(out), PixelBuffer.create(1, 1))
    assert stat.S_IMODE(out.stat().st_mode) == 0o644


@pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
def test_save_keeps_existing_permissions(tmp_path, umask_022):
    out = tmp_path / "out.bmp"
    out.write_bytes(b"old")
    os.chmod(out, 0o640)
    codec.save(str(out), PixelBuffer.create(1, 1))
    assert stat.S_IMODE(out.stat().st_mode) == 0o640
    assert codec.load(str(out)).samples == [BLACK]
