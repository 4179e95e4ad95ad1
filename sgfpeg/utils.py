import re
from string import ascii_lowercase, ascii_uppercase

# Board columns skip 'I'; past 'Z' the letters are doubled.
_COLUMNS = [c for c in ascii_uppercase if c != 'I']
BRD_COORD = _COLUMNS + [c + c for c in _COLUMNS]

# 'a'=1 ... 'z'=26, 'A'=27 ... 'X'=50
SGF_COORD = list((ascii_lowercase + ascii_uppercase)[:len(BRD_COORD)])

rePosition = re.compile(r'([A-Z]{1,2})([0-9]{1,2})')


class PointValueError(Exception):
    """Raised by [convert_position], [parse_position]"""
    pass


def is_pass(board_size, pos):
    return pos in ["", "pass"] or (pos == "tt" and board_size <= 19)


def convert_position(board_size, coord):
    """
    Convert SGF coordinates to board position coordinates
    Example aa -> A19, qq -> R3 (on 19x19)"""
    if is_pass(board_size, coord):
        return "pass"

    if (len(coord) != 2 or coord[0] not in SGF_COORD or coord[1] not in SGF_COORD
            or board_size <= SGF_COORD.index(coord[0]) or board_size <= SGF_COORD.index(coord[1])):
        raise PointValueError(f'"{coord}" is not a valid point for board size = {board_size}.')

    x = BRD_COORD[SGF_COORD.index(coord[0])]
    y = board_size - SGF_COORD.index(coord[1])
    return f"{x}{y}"


def parse_position(board_size, pos):
    """
    Convert board position coordinates to SGF coordinates
    Example A19 -> aa, R3 -> qq (on 19x19)
    """
    if pos == "pass":
        return ""

    match = rePosition.fullmatch(pos.upper())
    if match and match.group(1) in BRD_COORD:
        column = BRD_COORD.index(match.group(1))
        row = int(match.group(2))
        if column < board_size and 1 <= row <= board_size:
            return f"{SGF_COORD[column]}{SGF_COORD[board_size - row]}"
    raise PointValueError(f'"{pos}" is not a valid point for board size = {board_size}.')
