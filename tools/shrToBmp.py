#!/usr/bin/env python3
"""
SHR Files To BMP

Reads unpacked Apple IIGS Super-Hires pictures ($C1/$0000, 32768 bytes) and
writes each one as a 320x200 image. See shr_decoder.py for the file layout.
usage: python shrToBmp.py picture.shr [more.shr ...] [options]

Options
-------
--outdir DIR      where images are written   (default .)
--format FMT      bmp or png                 (default bmp)
--scale N         integer zoom factor >= 1
--merge N         also paste every picture into one sheet, N per row
--info            print colour table usage and ignored SCB mode flags
"""

import argparse
import os
import sys
from pathlib import Path

from PIL import Image

from shr_decoder import (HEIGHT, WIDTH, DecodeError, decode, mode_flag_rows,
                         palette_usage, read_shr_file)


def positive_int(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f'{text} is not >= 1')
    return value


def to_image(rgba: bytes) -> Image.Image:
    return Image.frombytes('RGBA', (WIDTH, HEIGHT), rgba)


def scale_image(image, scale):
    if scale == 1:
        return image
    return image.resize((image.width * scale, image.height * scale), Image.NEAREST)


def mergeImages(outputPath, images, images_per_row):
    # Determine the total size of the merged image
    if not images:
        return None

    total_width = images[0].width * images_per_row
    total_rows = len(images) // images_per_row + (1 if len(images) % images_per_row else 0)
    total_height = images[0].height * total_rows

    merged_image = Image.new('RGB', (total_width, total_height))

    # Place each image in the correct position
    x_offset, y_offset = 0, 0
    for i, image in enumerate(images):
        merged_image.paste(image.convert('RGB'), (x_offset, y_offset))
        x_offset += image.width
        if (i + 1) % images_per_row == 0:
            x_offset = 0
            y_offset += image.height

    merged_image.save(outputPath)
    return outputPath


def print_info(raw):
    usage = palette_usage(raw)
    print("palette : scanlines")
    for which in sorted(usage):
        print(f"   0x{which:X}  : {usage[which]}")

    flagged = mode_flag_rows(raw)
    if flagged:
        print(f"{len(flagged)} scanline(s) carry 640/fill mode bits, decoded as 320 mode "
              f"(first at row {flagged[0]})")


def convert_file(inputFileName, outdir, fmt, scale, info=False):
    print("")
    print(f"Processing {inputFileName}")

    raw = read_shr_file(inputFileName)
    rgba = decode(raw)
    if info:
        print_info(raw)

    image = scale_image(to_image(rgba), scale)
    outputFileName = Path(outdir) / f"{Path(inputFileName).stem}.{fmt}"
    # BMP has no alpha worth keeping, every pixel is opaque
    image.convert('RGB').save(outputFileName)
    print('Image →', outputFileName)
    return image


def parse_arguments(argv=None):
    p = argparse.ArgumentParser(
        description='Convert Apple IIGS Super-Hires pictures to BMP/PNG.')
    p.add_argument('files', nargs='+', help='input SHR files')
    p.add_argument('--outdir', default='.',
                   help='output directory              (default: %(default)s)')
    p.add_argument('--format', default='bmp', choices=('bmp', 'png'),
                   help='output image format           (default: %(default)s)')
    p.add_argument('--scale', type=positive_int, default=1,
                   help='integer zoom factor ≥1        (default: %(default)s)')
    p.add_argument('--merge', type=positive_int, metavar='N',
                   help='also write shr_merged.<format>, N pictures per row')
    p.add_argument('--info', action='store_true',
                   help='print colour table usage per file')
    return p.parse_args(argv)


def main(argv=None) -> None:
    args = parse_arguments(argv)

    # Check if all files exist
    for fileName in args.files:
        if not os.path.isfile(fileName):
            print(f"File {fileName} not found. Exiting the program.")
            sys.exit(1)

    Path(args.outdir).mkdir(parents=True, exist_ok=True)

    images = []
    for inputFileName in args.files:
        try:
            images.append(convert_file(inputFileName, args.outdir, args.format,
                                       args.scale, info=args.info))
        except DecodeError as e:
            print(f"Error: {inputFileName}: {e}")
            sys.exit(1)

    if args.merge:
        images_per_row = min(args.merge, len(images))
        merged = mergeImages(Path(args.outdir) / f"shr_merged.{args.format}",
                             images, images_per_row)
        print('Merged →', merged)


if __name__ == '__main__':
    main()
