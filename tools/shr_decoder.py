"""
Apple IIGS Super-Hires ($C1/$0000) decoder

An unpacked SHR picture is a 32 KB dump of the IIGS video bank. There is no
header, every field sits at a fixed offset:
    - Bytes 0 to 31999 hold the bitmap: 200 scanlines of 160 bytes. Each byte
      is two 4-bit colour indices, the high nibble being the left pixel.
    - Bytes 32000 to 32255 are the scanline control bytes (SCBs), one per
      scanline (only the first 200 are used). The low nibble picks which of
      the 16 colour tables the scanline is drawn with.
    - Bytes 32256 to 32767 are the 16 colour tables (see palette_shr.py).

The high bits of an SCB (640 mode, interrupt, colour fill) are NOT honoured:
every scanline is decoded as 320 mode. mode_flag_rows() reports the scanlines
where that matters.

decode() turns the dump into 320x200 RGBA, 4 bytes per pixel, alpha 255.
"""

from collections import Counter, namedtuple
from pathlib import Path

from palette_shr import PALETTE_TABLE_SIZE, palette_to_rgba, parse_palette_table

WIDTH  = 320
HEIGHT = 200
BYTES_PER_ROW   = 160
BYTES_PER_PIXEL = 4

PIXELS_SIZE = BYTES_PER_ROW * HEIGHT          # 32000
SCB_OFFSET  = PIXELS_SIZE
SCB_SIZE    = 256
PAL_OFFSET  = SCB_OFFSET + SCB_SIZE           # 32256
SHR_SIZE    = PAL_OFFSET + PALETTE_TABLE_SIZE # 32768
OUTPUT_SIZE = WIDTH * HEIGHT * BYTES_PER_PIXEL

SCB_PALETTE_MASK = 0x0F
SCB_MODE_MASK    = 0xF0

Regions = namedtuple('Regions', 'pixels scbs palettes')


class DecodeError(ValueError):
    pass


class TruncatedInputError(DecodeError):
    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f'SHR data incomplete: need {required} bytes, got {actual}.')


def _check_length(raw):
    if len(raw) < SHR_SIZE:
        raise TruncatedInputError(SHR_SIZE, len(raw))


def split_regions(raw) -> Regions:
    """Read-only views of the bitmap, SCB and colour table regions of *raw*."""
    _check_length(raw)
    view = memoryview(raw).toreadonly()
    return Regions(view[:PIXELS_SIZE],
                   view[SCB_OFFSET:PAL_OFFSET],
                   view[PAL_OFFSET:SHR_SIZE])


def scanline_palette(scb: int) -> int:
    return scb & SCB_PALETTE_MASK


def palette_usage(raw) -> Counter:
    """Number of scanlines drawn with each colour table."""
    scbs = split_regions(raw).scbs
    return Counter(scanline_palette(scb) for scb in scbs[:HEIGHT])


def mode_flag_rows(raw) -> list:
    """Scanlines whose SCB carries mode bits this decoder ignores."""
    scbs = split_regions(raw).scbs
    return [row for row in range(HEIGHT) if scbs[row] & SCB_MODE_MASK]


def _split_rgba(rgba):
    # one 4-byte entry per colour index
    return [rgba[i : i + BYTES_PER_PIXEL] for i in range(0, len(rgba), BYTES_PER_PIXEL)]


def decode(raw) -> bytes:
    """
    Decode an SHR dump into WIDTH*HEIGHT RGBA pixels, top row first.

    Raises TruncatedInputError when *raw* is shorter than SHR_SIZE; trailing
    bytes past SHR_SIZE are ignored. *raw* is never modified.
    """
    pixels, scbs, table = split_regions(raw)
    palettes = parse_palette_table(table)

    out = bytearray(OUTPUT_SIZE)
    lookups = {}
    row_stride = WIDTH * BYTES_PER_PIXEL

    for row in range(HEIGHT):
        which = scanline_palette(scbs[row])
        rgba = lookups.get(which)
        if rgba is None:
            rgba = lookups[which] = _split_rgba(palette_to_rgba(palettes[which]))

        src = row * BYTES_PER_ROW
        dst = row * row_stride
        for pair in pixels[src : src + BYTES_PER_ROW]:
            out[dst : dst + 4]     = rgba[(pair >> 4) & 0x0F]   # left pixel
            out[dst + 4 : dst + 8] = rgba[pair & 0x0F]          # right pixel
            dst += 8

    return bytes(out)


def read_shr_file(path) -> bytes:
    """Load a raw SHR picture from disk. FileNotFoundError is left to the caller."""
    return Path(path).read_bytes()
