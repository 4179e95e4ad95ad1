import argparse
import os

import yaml

from .config import LOG_LEVELS, load_config
from .log import logger, setup_logging
from .parser import parse_file
from .scanner import ParseError
from .settings import PATH_TO_CONFIG
from .utils import PointValueError, convert_position


def parse_cmd_line(argv=None):
    parser = argparse.ArgumentParser(prog='sgfpeg', argument_default=None,
                                     description="Parse SGF files and report syntax errors.")

    parser.add_argument("path_to_sgf", nargs='+', help="List of SGF-files or directories to parse.")
    parser.add_argument('-c', '--config', default=PATH_TO_CONFIG, dest='path_to_config',
                        help="YAML file with a 'config' mapping (default: ./config.yaml).")
    parser.add_argument('--normalize', dest='normalize', action='store_true',
                        help="Write the canonical SGF of every parsed file next to it.")
    parser.add_argument('--moves', dest='moves', action='store_true',
                        help="Print the main line moves of every game.")
    parser.add_argument('--log-level', dest='log_level', choices=LOG_LEVELS,
                        help="Overrides log_level from the config file.")

    return parser.parse_args(argv)


def collect_games(paths):
    """Expand directories to the .sgf files they contain."""
    games = []
    for path in paths:
        if os.path.isdir(path):
            for file in sorted(os.listdir(path)):
                path_to_file = os.path.join(path, file)
                if os.path.splitext(path_to_file)[1] == '.sgf':
                    games.append(path_to_file)
        elif os.path.exists(path):
            games.append(path)
        else:
            logger.warning("No such file or directory: %s", path)
    return games


def count_branch_points(collection):
    return sum(1 for root in collection for node in root.walk() if len(node.children) > 1)


def mainline_moves(root, board_size):
    """Main line moves as (color, board position) pairs."""
    for node in root.mainline():
        for color in ('B', 'W'):
            point = node.get_point(color)
            if point is not None:
                yield color, convert_position(board_size, point)


def process_game(path, config, normalize=False, moves=False):
    collection = parse_file(path, config['encoding'])
    logger.info("Parsed %s: %s game(s), %s node(s), %s branch point(s).", os.path.basename(path),
                len(collection), collection.count_nodes(), count_branch_points(collection))

    if moves:
        for game_num, root in enumerate(collection, start=1):
            board_size = root.get_number('SZ') or config['board_size']
            line = " ".join(f"{color}[{pos}]" for color, pos in mainline_moves(root, board_size))
            print(f"{os.path.basename(path)} #{game_num}: {line}")

    if normalize:
        path_to_save = config['suffix'].join(os.path.splitext(path))
        collection.save_to_file(path_to_save)
        logger.info("Saved %s", path_to_save)

    return collection


def main(argv=None):
    cmd_args = parse_cmd_line(argv)

    try:
        config = load_config(cmd_args.path_to_config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        setup_logging()
        logger.error("Failed to load config: %s", e)
        return 2

    setup_logging(cmd_args.log_level or config['log_level'], config['log_file'])

    games = collect_games(cmd_args.path_to_sgf)
    logger.info('Found %s sgf-files to parse.', len(games))

    failures = 0
    for game in games:
        try:
            process_game(game, config, cmd_args.normalize, cmd_args.moves)
        except ParseError as e:
            logger.error("%s: %s", game, e)
            failures += 1
        except (OSError, UnicodeDecodeError, PointValueError) as e:
            logger.error("%s: %s", game, e)
            failures += 1

    logger.info('Parsed %s of %s sgf-files.', len(games) - failures, len(games))
    return 1 if failures else 0
