"""
Recursive-descent parser for SGF data.

Grammar (Ws is zero or more of the whitespace class):

    collection := game_tree+
    game_tree  := Ws "(" sequence game_tree* ")" Ws
    sequence   := Ws node+ Ws
    node       := Ws ";" property* Ws
    property   := Ws prop_ident prop_value+ Ws
    prop_ident := [A-Z]+
    prop_value := Ws "[" ("\\]" | [^]])* "]" Ws

Each rule takes the [ParseState] and a position and returns a tuple
(new position, value), or [FAILED]. Repetitions are greedy and never
backtrack into elements they have already matched.
"""

from .log import logger
from .scanner import FAILED, ParseState, match_any_char, match_char_range, match_literal, skip_whitespace
from .sgflib import Collection, DuplicatePropertyError, Node, Property


def parse(text: str):
    """Parses [text], which must be one complete SGF collection. Returns a
    [Collection] of root nodes, one per game. Raises [ParseError] otherwise."""
    logger.debug("Parsing %s characters of SGF data.", len(text))
    state = ParseState(text)
    result = parse_collection(state, 0)
    if result is not FAILED:
        pos, collection = result
        if pos == state.length:
            logger.debug("Parsed %s game tree(s).", len(collection))
            return collection
    error = state.error()
    logger.debug("Parsing failed at %s:%s.", error.line, error.column)
    raise error


def parse_file(path_to_sgf, encoding: str = 'utf-8'):
    """Return parsed [Collection] from an SGF file. Line breaks are kept as
    they are in the file."""
    with open(path_to_sgf, 'r', encoding=encoding, newline='') as sgf_file:
        data = sgf_file.read()
    return parse(data)


def _repeat(rule, state: ParseState, pos: int, minimum: int = 0):
    """Match [rule] as many times as possible. Fails only if fewer than [minimum] matched."""
    values = []
    while True:
        result = rule(state, pos)
        if result is FAILED:
            break
        pos, value = result
        values.append(value)
    if len(values) < minimum:
        return FAILED
    return pos, values


def parse_collection(state: ParseState, pos: int):
    result = _repeat(parse_game_tree, state, pos, minimum=1)
    if result is FAILED:
        return FAILED
    pos, roots = result
    return pos, Collection(roots)


def _open_game_tree(state: ParseState, pos: int):
    pos = skip_whitespace(state, pos)
    pos = match_literal(state, pos, "(")
    if pos is FAILED:
        return FAILED
    return parse_sequence(state, pos)


def parse_game_tree(state: ParseState, pos: int):
    """A sequence with its variations attached to the end of its main line.

    Nested variations are matched with an explicit stack, so deeply nested
    files do not hit the recursion limit. Each entry holds the start position,
    the sequence and the variations matched so far of a game tree that is
    still open.
    """
    stack = []
    while True:
        result = _open_game_tree(state, pos)
        if result is not FAILED:
            start = pos
            pos, root = result
            stack.append((start, root, []))
            continue

        # No further variation at pos.
        if not stack:
            return FAILED
        while True:
            start, root, variations = stack.pop()
            end = match_literal(state, pos, ")")
            if end is FAILED:
                if not stack:
                    return FAILED
                # The enclosing tree's variations stop where this one began.
                pos = start
                continue
            pos = skip_whitespace(state, end)
            root.leaf().children.extend(variations)
            if not stack:
                return pos, root
            stack[-1][2].append(root)
            break


def parse_sequence(state: ParseState, pos: int):
    """Nodes in a row become a chain: each one is the only child of the one before."""
    pos = skip_whitespace(state, pos)
    result = _repeat(parse_node, state, pos, minimum=1)
    if result is FAILED:
        return FAILED
    pos, nodes = result
    pos = skip_whitespace(state, pos)

    nodes.reverse()
    chain = nodes[0]
    for node in nodes[1:]:
        node.children.append(chain)
        chain = node
    return pos, chain


def parse_node(state: ParseState, pos: int):
    pos = skip_whitespace(state, pos)
    pos = match_literal(state, pos, ";")
    if pos is FAILED:
        return FAILED
    pos, properties = _repeat(parse_property, state, pos)
    pos = skip_whitespace(state, pos)

    node = Node()
    for prop in properties:
        try:
            node.add_property(prop)
        except DuplicatePropertyError:
            return state.mark_failure(pos, "duplicated properties")
    return pos, node


def parse_property(state: ParseState, pos: int):
    pos = skip_whitespace(state, pos)
    result = parse_prop_ident(state, pos)
    if result is FAILED:
        return FAILED
    pos, label = result
    result = _repeat(parse_prop_value, state, pos, minimum=1)
    if result is FAILED:
        return FAILED
    pos, values = result
    pos = skip_whitespace(state, pos)
    return pos, Property(label, values)


def _match_upper(state: ParseState, pos: int):
    pos = match_char_range(state, pos, "A", "Z")
    if pos is FAILED:
        return FAILED
    return pos, None


def parse_prop_ident(state: ParseState, pos: int):
    start = pos
    result = _repeat(_match_upper, state, pos, minimum=1)
    if result is FAILED:
        return FAILED
    pos = result[0]
    return pos, state.text[start:pos]


def _match_value_char(state: ParseState, pos: int):
    """An escaped closing bracket, or any single character but ']'."""
    new_pos = match_literal(state, pos, "\\]")
    if new_pos is not FAILED:
        return new_pos, None
    if pos < state.length and state.text[pos] == "]":
        return state.mark_failure(pos, "[^]]")
    with state.suppressed():
        new_pos = match_any_char(state, pos)
    if new_pos is FAILED:
        return state.mark_failure(pos, "[^]]")
    return new_pos, None


def parse_prop_value(state: ParseState, pos: int):
    """The raw text between the brackets; escapes are left as they are."""
    pos = skip_whitespace(state, pos)
    pos = match_literal(state, pos, "[")
    if pos is FAILED:
        return FAILED
    start = pos
    pos = _repeat(_match_value_char, state, pos)[0]
    value = state.text[start:pos]
    pos = match_literal(state, pos, "]")
    if pos is FAILED:
        return FAILED
    pos = skip_whitespace(state, pos)
    return pos, value
