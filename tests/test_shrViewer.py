"""Tests for the pygame viewer's fitting and loading (dummy SDL video driver)."""
import pygame
import pytest

from shrViewer import fit_rect, load_surface, parse_arguments


def test_fit_rect_same_size():
    assert fit_rect((320, 200), (0, 0, 320, 200)) == pygame.Rect(0, 0, 320, 200)


def test_fit_rect_exact_double():
    assert fit_rect((320, 200), (0, 0, 640, 400)) == pygame.Rect(0, 0, 640, 400)


def test_fit_rect_letterbox():
    # width limits: 800/320 = 2.5 < 600/200
    assert fit_rect((320, 200), (0, 0, 800, 600)) == pygame.Rect(0, 50, 800, 500)


def test_fit_rect_pillarbox_with_offset():
    # height limits: 200/200 = 1 < 500/320
    assert fit_rect((320, 200), (10, 20, 500, 200)) == pygame.Rect(100, 20, 320, 200)


def test_fit_rect_keeps_aspect():
    rect = fit_rect((320, 200), (0, 0, 1000, 700))
    assert rect.width == 1000
    # 37.5 offset, rounded outwards to whole pixels
    assert rect.top == 37
    assert rect.height == 626


def test_parse_arguments_defaults():
    args = parse_arguments(["pic.shr"])
    assert (args.width, args.height) == (640, 400)


def test_load_surface(tmp_path, striped_shr):
    path = tmp_path / "pic.shr"
    path.write_bytes(bytes(striped_shr))
    surface = load_surface(str(path))
    assert surface.get_size() == (320, 200)
    assert tuple(surface.get_at((0, 0))) == (255, 0, 0, 255)
    assert tuple(surface.get_at((319, 1))) == (255, 255, 255, 255)


def test_load_surface_truncated(tmp_path, capsys):
    path = tmp_path / "short.shr"
    path.write_bytes(b'\x00' * 10)
    with pytest.raises(SystemExit) as excinfo:
        load_surface(str(path))
    assert excinfo.value.code == 1
    assert "incomplete" in capsys.readouterr().out
