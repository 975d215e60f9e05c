import os

import pytest

from shr_decoder import PAL_OFFSET, SCB_OFFSET, SHR_SIZE

# pygame must not try to open a real display during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


def set_color(data, palette, index, word):
    offset = PAL_OFFSET + (palette * 16 + index) * 2
    data[offset] = word & 0xFF
    data[offset + 1] = (word >> 8) & 0xFF


@pytest.fixture
def blank_shr():
    """An all-zero SHR dump: every pixel is colour 0 of table 0 (black)."""
    return bytearray(SHR_SIZE)


@pytest.fixture
def striped_shr():
    """Tables 0 and 1 set, alternate scanlines select them, pixel pair 0x12."""
    data = bytearray(SHR_SIZE)
    set_color(data, 0, 1, 0x0F00)  # red
    set_color(data, 0, 2, 0x00F0)  # green
    set_color(data, 1, 1, 0x000F)  # blue
    set_color(data, 1, 2, 0x0FFF)  # white
    for row in range(200):
        data[SCB_OFFSET + row] = row & 1
        for col in range(160):
            data[row * 160 + col] = 0x12
    return data
