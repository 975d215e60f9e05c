"""
SHR Picture Viewer using Pygame

Shows an unpacked Apple IIGS Super-Hires picture in a resizable window. The
picture is scaled to fit the window while keeping its 320x200 proportions,
and centred.

Command Line Arguments:
    1. filename: path to the SHR picture ($C1/$0000, 32768 bytes).
    2. --width / --height (optional): initial window size. Default 640x400.

Usage Examples:
    $ python3 shrViewer.py ../assets/ANGELFISH.SHR
    $ python3 shrViewer.py ../assets/ANGELFISH.SHR --width 960 --height 600

Escape or closing the window quits.
"""

import argparse
import math
import sys

import pygame

from shr_decoder import HEIGHT, WIDTH, DecodeError, decode, read_shr_file


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="Apple IIGS Super-Hires Viewer")
    parser.add_argument("filename", help="Path to the SHR file")
    parser.add_argument("--width", type=int, default=640, help="Initial window width")
    parser.add_argument("--height", type=int, default=400, help="Initial window height")
    return parser.parse_args(argv)


def fit_rect(image_size, target) -> pygame.Rect:
    """Largest whole-pixel rect with the image's aspect ratio, centred in *target*."""
    target = pygame.Rect(target)
    source_width, source_height = image_size
    if (source_width, source_height) == target.size:
        return target

    scale_factor = min(target.width / source_width, target.height / source_height)
    final_width = source_width * scale_factor
    final_height = source_height * scale_factor

    x = target.x + (target.width - final_width) * 0.5
    y = target.y + (target.height - final_height) * 0.5
    left, top = math.floor(x), math.floor(y)
    return pygame.Rect(left, top,
                       math.ceil(x + final_width) - left,
                       math.ceil(y + final_height) - top)


def load_surface(filename):
    try:
        raw = read_shr_file(filename)
    except FileNotFoundError:
        print(f"Error: The SHR file {filename} was not found.")
        sys.exit(1)
    try:
        rgba = decode(raw)
    except DecodeError as e:
        print(f"Error: {filename}: {e}")
        sys.exit(1)
    # frombuffer shares memory with rgba, copy so the surface owns its pixels
    return pygame.image.frombuffer(rgba, (WIDTH, HEIGHT), 'RGBA').copy()


def main(argv=None):
    args = parse_arguments(argv)
    picture = load_surface(args.filename)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    pygame.display.set_caption(f"SHR Viewer - {args.filename}")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False

        screen.fill((0, 0, 0))
        rect = fit_rect(picture.get_size(), screen.get_rect())
        screen.blit(pygame.transform.scale(picture, rect.size), rect.topleft)
        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == '__main__':
    main()
