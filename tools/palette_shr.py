# palette_shr.py
# --------------- read the 16 colour tables of an Apple IIGS SHR picture

from pathlib import Path

PALETTE_COUNT  = 16
COLORS_PER_PAL = 16
PALETTE_TABLE_OFFSET = 0x7E00          # 32256
PALETTE_TABLE_SIZE   = PALETTE_COUNT * COLORS_PER_PAL * 2


def decode_color_word(word: int) -> tuple:
    """Split a 0x0RGB colour word into raw 4-bit (r, g, b). Bits 12-15 are unused."""
    return ((word >> 8) & 0x0F, (word >> 4) & 0x0F, word & 0x0F)


def expand_channel(value: int) -> int:
    # 0-15 -> 0, 17, ... 238, 255
    return (value & 0x0F) * 17


def parse_palette_table(table: bytes) -> list:
    """
    Interprets 512 bytes as 16 palettes of 16 little-endian colour words.
    Palette index varies slowest. Colours keep their 4-bit channel values;
    expansion to 8 bits is left to whoever draws with them.
    """
    if len(table) < PALETTE_TABLE_SIZE:
        raise ValueError('Palette data incomplete.')

    palettes = []
    k = 0
    for _ in range(PALETTE_COUNT):
        palette = []
        for _ in range(COLORS_PER_PAL):
            word = table[k] | (table[k + 1] << 8)
            palette.append(decode_color_word(word))
            k += 2
        palettes.append(palette)
    return palettes


def load_shr_palettes(path: str, offset: int = PALETTE_TABLE_OFFSET) -> list:
    """Reads the palette table of an SHR file on disk."""
    raw = Path(path).read_bytes()[offset : offset + PALETTE_TABLE_SIZE]
    return parse_palette_table(raw)


def expand_color(color: tuple) -> tuple:
    r, g, b = color
    return (expand_channel(r), expand_channel(g), expand_channel(b))


def palette_to_rgba(palette: list) -> bytes:
    """Returns 16×RGBA (alpha 255) for one palette."""
    rgba = bytearray()
    for color in palette:
        rgba += bytes(expand_color(color) + (255,))
    return bytes(rgba)
