"""
Generate a BMP showing the 16 colour tables of an Apple IIGS SHR picture.

One row per colour table, one swatch per colour, each swatch labelled with
its index. The first column holds the table number.

Usage:
    python printPalette.py picture.shr palette.bmp --base 16
"""
import argparse
import sys

from PIL import Image, ImageDraw, ImageFont

from palette_shr import COLORS_PER_PAL, expand_color, load_shr_palettes


def format_index(value, base):
    """Convert an integer to its string representation in the given base (2-36)."""
    if base < 2 or base > 36:
        raise ValueError("Base must be between 2 and 36")
    digits = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    if value == 0:
        return "0"
    result = ''
    n = value
    while n > 0:
        n, rem = divmod(n, base)
        result = digits[rem] + result
    return result


def label_color(rgb):
    # black text on light swatches, white on dark
    r, g, b = rgb
    return (0, 0, 0) if (r * 299 + g * 587 + b * 114) > 128000 else (255, 255, 255)


def draw_label(draw, font, text, x, y, swatch_size, fill):
    bbox = draw.textbbox((0, 0), text, font=font)
    tw = bbox[2] - bbox[0]
    th = bbox[3] - bbox[1]
    # Center text in swatch
    tx = x + (swatch_size - tw) / 2
    ty = y + (swatch_size - th) / 2
    draw.text((tx, ty), text, fill=fill, font=font)


def create_palette_image(palettes, swatch_size=40, base=10):
    """Create an RGB image with a row of swatches per colour table."""
    width = (COLORS_PER_PAL + 1) * swatch_size
    height = len(palettes) * swatch_size

    img = Image.new('RGB', (width, height), (64, 64, 64))
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    for which, palette in enumerate(palettes):
        y = which * swatch_size
        draw_label(draw, font, format_index(which, base), 0, y, swatch_size,
                   (255, 255, 0))
        for idx, color in enumerate(palette):
            x = (idx + 1) * swatch_size
            rgb = expand_color(color)
            draw.rectangle([x, y, x + swatch_size - 1, y + swatch_size - 1], fill=rgb)
            draw_label(draw, font, format_index(idx, base), x, y, swatch_size,
                       label_color(rgb))

    return img


def numeral_base(text):
    base = int(text)
    if base < 2 or base > 36:
        raise argparse.ArgumentTypeError(f"base {text} is not between 2 and 36")
    return base


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate BMP displaying the colour tables of an SHR picture")
    parser.add_argument('shr_file', help='Path to the SHR picture')
    parser.add_argument('output_file', help='Output BMP filename')
    parser.add_argument('--swatch-size', type=int, default=40, help='Size of each color swatch')
    parser.add_argument('--base', type=numeral_base, default=10, help='Numeral base for index labels (2-36)')
    args = parser.parse_args(argv)

    try:
        palettes = load_shr_palettes(args.shr_file)
    except FileNotFoundError:
        print(f"Error: The SHR file {args.shr_file} was not found.")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {args.shr_file}: {e}")
        sys.exit(1)

    img = create_palette_image(palettes, swatch_size=args.swatch_size, base=args.base)
    img.save(args.output_file, format='BMP')
    print(f"Saved palette image to {args.output_file} with index base {args.base}")


if __name__ == '__main__':
    main()
