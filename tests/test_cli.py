import logging

import pytest

from sgfpeg.cli import collect_games, main
from sgfpeg.log import logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)


@pytest.fixture
def no_config(tmp_path):
    return ['--config', str(tmp_path / "missing.yaml")]


def write_sgf(path, data):
    path.write_text(data, encoding='utf-8')
    return str(path)


def test_main_moves(tmp_path, capsys, no_config):
    game = write_sgf(tmp_path / "game.sgf", "(;FF[4]SZ[19];B[pd];W[dp](;B[dd])(;B[qq]))")
    assert main([game, '--moves'] + no_config) == 0
    out = capsys.readouterr().out
    assert "game.sgf #1: B[Q16] W[D4] B[D16]" in out
    assert "1 game(s), 5 node(s), 1 branch point(s)" in out


def test_main_moves_small_board(tmp_path, capsys, no_config):
    game = write_sgf(tmp_path / "game.sgf", "(;SZ[9];B[ee];W[];B[tt])")
    assert main([game, '--moves'] + no_config) == 0
    assert "game.sgf #1: B[E5] W[pass] B[pass]" in capsys.readouterr().out


def test_main_normalize(tmp_path, no_config):
    game = write_sgf(tmp_path / "game.sgf", "(;FF[4] ;B[pd]\n;W[dp])\n")
    assert main([game, '--normalize'] + no_config) == 0
    saved = tmp_path / "game_normalized.sgf"
    assert saved.read_text(encoding='utf-8') == "(;FF[4];B[pd];W[dp])"


def test_main_reports_parse_errors(tmp_path, capsys, no_config):
    good = write_sgf(tmp_path / "good.sgf", "(;FF[4])")
    bad = write_sgf(tmp_path / "bad.sgf", "(;FF[4]FF[3])")
    assert main([good, bad] + no_config) == 1
    out = capsys.readouterr().out
    assert "error at 1:13: expected" in out
    assert "duplicated properties" in out
    assert "Parsed 1 of 2 sgf-files." in out


def test_main_bad_config(tmp_path, capsys):
    game = write_sgf(tmp_path / "game.sgf", "(;FF[4])")
    path_to_config = tmp_path / "config.yaml"
    path_to_config.write_text("config:\n  unknown: 1\n", encoding='utf-8')
    assert main([game, '--config', str(path_to_config)]) == 2
    assert "Failed to load config" in capsys.readouterr().out


def test_collect_games(tmp_path):
    write_sgf(tmp_path / "b.sgf", "(;)")
    write_sgf(tmp_path / "a.sgf", "(;)")
    write_sgf(tmp_path / "notes.txt", "")
    single = write_sgf(tmp_path / "single.SGF", "(;)")
    games = collect_games([str(tmp_path), single, str(tmp_path / "missing.sgf")])
    assert games == [str(tmp_path / "a.sgf"), str(tmp_path / "b.sgf"), single]


def test_main_deeply_nested_variations(tmp_path, capsys, no_config):
    game = write_sgf(tmp_path / "deep.sgf", "(;FF[4]" + "(;B[aa]" * 1000 + ")" * 1001)
    assert main([game] + no_config) == 0
    assert "1 game(s), 1001 node(s), 0 branch point(s)" in capsys.readouterr().out


def test_main_normalize_keeps_line_breaks_in_values(tmp_path, no_config):
    path_to_sgf = tmp_path / "game.sgf"
    path_to_sgf.write_bytes(b"(;C[a\r\nb]\r\n;B[pd])\r\n")
    assert main([str(path_to_sgf), '--normalize'] + no_config) == 0
    assert (tmp_path / "game_normalized.sgf").read_bytes() == b"(;C[a\r\nb];B[pd])"


def test_main_bad_log_level_in_config(tmp_path, capsys):
    game = write_sgf(tmp_path / "game.sgf", "(;FF[4])")
    path_to_config = tmp_path / "config.yaml"
    path_to_config.write_text("config:\n  log_level: verbose\n", encoding='utf-8')
    assert main([game, '--config', str(path_to_config)]) == 2
    assert "log_level must be one of" in capsys.readouterr().out
