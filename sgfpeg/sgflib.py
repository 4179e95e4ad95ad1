"""
SGF game tree model. Every [Node] owns its children directly, so a parsed
collection is a forest of nodes: the main line of a game is the chain of
first children and every node with more than one child is a branch point.

Property values are kept exactly as written between the brackets. The typed
accessors of [Node] interpret (and escape) them on demand.
"""

import math
import re
from collections import UserList, OrderedDict
from decimal import Decimal

from .text import decode_simple_text, decode_text, encode_text

reNumber = re.compile(r'[+-]?[0-9]+')
reReal = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)')


class DuplicatePropertyError(Exception):
    """Raised by [Node.add_property()]."""
    pass


def _split_compose(value: str):
    """Split a composed value at the first unescaped ':'. Returns None if there is none."""
    index = 0
    while index < len(value):
        char = value[index]
        if char == '\\':
            index += 2
        elif char == ':':
            return value[:index], value[index + 1:]
        else:
            index += 1
    return None


def _to_number(value: str):
    if reNumber.fullmatch(value):
        return int(value)
    return None


def _to_real(value: str):
    if reReal.fullmatch(value):
        return float(value)
    return None


def _format_real(value: float):
    """Plain decimal notation: no exponent, no trailing '.0'."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{value} is not a valid SGF real.")
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), 'f')


class Property(UserList):
    """
    An SGF property: a label and its raw value(s). Instance attributes:
      - self[.data] : list of str -- property values, as written in the SGF data.
      - self.label : string -- property identifier."""

    def __init__(self, label: str, data: list):
        self.label = label
        super().__init__(initlist=data or [''])

    def __str__(self):
        return f"{self.label}[{']['.join(self)}]"


class Node(OrderedDict):
    """
    An SGF node. Instance attributes:
      - self[.data] : ordered dictionary -- [Property.label:Property] mapping.
      - self.children : list of [Node] -- the next move first, then variations.

    Properties *must* be added using [self.add_property()] or [self.set_property()].

    Example: Let 'n' be the root parsed from '(;B[aa]BL[250]C[comment])':
      - 'str(n["BL"])'    =>  'BL[250]'
      - 'n.get_number("BL")'  =>  250
      - 'str(n)'          =>  '(;B[aa]BL[250]C[comment])'"""

    def __init__(self, pr_list: list = None):
        super().__init__()
        self.children = []
        for prop in pr_list or []:  # type: Property
            self.add_property(prop)

    def __repr__(self):
        props = ", ".join(f"{label}={list(prop)!r}" for label, prop in self.items())
        return f"Node({props}; {len(self.children)} children)"

    def __str__(self):
        """SGF representation of the game tree rooted at this node."""
        parts = []
        # Game trees still to write, and the ")" closing each open one.
        pending = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            parts.append("(")
            node = item
            while True:
                parts.append(node.sgf_node())
                if len(node.children) != 1:
                    break
                node = node.children[0]
            pending.append(")")
            pending.extend(reversed(node.children))
        return "".join(parts)

    def sgf_node(self):
        """SGF representation of this node alone. Has leading semicolon."""
        return f";{''.join(str(prop) for prop in self.values())}"

    def add_property(self, prop: Property):
        """Adds a [Property]. Raises [DuplicatePropertyError] if its label is already bound."""
        if prop.label in self:
            raise DuplicatePropertyError(f"Property {prop.label} is already set in this node.")
        self[prop.label] = prop

    def set_property(self, label: str, values: list):
        self[label] = Property(label, values)

    # Tree navigation

    def leaf(self):
        """Follows the first children down to the end of the main line."""
        node = self
        while node.children:
            node = node.children[0]
        return node

    def mainline(self):
        """Iterates over this node and its first-child descendants."""
        node = self
        yield node
        while node.children:
            node = node.children[0]
            yield node

    def walk(self):
        """Depth-first, pre-order iteration over the whole subtree."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    # Typed accessors. Getters return None when the property is missing or
    # its first value does not convert.

    def _first(self, label):
        prop = self.get(label)
        if prop:
            return prop[0]
        return None

    def _compose(self, label):
        value = self._first(label)
        if value is None:
            return None
        return _split_compose(value)

    def get_point(self, label: str):
        return self._first(label)

    def set_point(self, label: str, value: str):
        self.set_property(label, [value])

    def get_points(self, label: str):
        prop = self.get(label)
        if prop is None:
            return None
        return list(prop)

    def set_points(self, label: str, values: list):
        self.set_property(label, list(values))

    def get_number(self, label: str):
        value = self._first(label)
        return None if value is None else _to_number(value)

    def set_number(self, label: str, value: int):
        self.set_property(label, [str(value)])

    def get_real(self, label: str):
        value = self._first(label)
        return None if value is None else _to_real(value)

    def set_real(self, label: str, value: float):
        self.set_property(label, [_format_real(value)])

    def get_color(self, label: str):
        value = self._first(label)
        return value[0] if value else None

    def set_color(self, label: str, value: str):
        self.set_property(label, [value])

    def get_double(self, label: str):
        value = self._first(label)
        return value[0] if value else None

    def set_double(self, label: str, value: str):
        self.set_property(label, [value])

    def get_text(self, label: str):
        value = self._first(label)
        return None if value is None else decode_text(value)

    def set_text(self, label: str, value: str):
        self.set_property(label, [encode_text(value)])

    def get_simple_text(self, label: str):
        value = self._first(label)
        return None if value is None else decode_simple_text(value)

    def set_simple_text(self, label: str, value: str):
        self.set_property(label, [encode_text(value)])

    def get_point_point(self, label: str):
        return self._compose(label)

    def set_point_point(self, label: str, value: tuple):
        self.set_property(label, [f"{value[0]}:{value[1]}"])

    def get_point_simple_text(self, label: str):
        pair = self._compose(label)
        if pair is None:
            return None
        return pair[0], decode_simple_text(pair[1])

    def set_point_simple_text(self, label: str, value: tuple):
        self.set_property(label, [f"{value[0]}:{encode_text(value[1])}"])

    def get_simple_text_simple_text(self, label: str):
        pair = self._compose(label)
        if pair is None:
            return None
        return decode_simple_text(pair[0]), decode_simple_text(pair[1])

    def set_simple_text_simple_text(self, label: str, value: tuple):
        self.set_property(label, [f"{encode_text(value[0])}:{encode_text(value[1])}"])

    def get_number_number(self, label: str):
        pair = self._compose(label)
        if pair is None:
            return None
        first, second = _to_number(pair[0]), _to_number(pair[1])
        if first is None or second is None:
            return None
        return first, second

    def set_number_number(self, label: str, value: tuple):
        self.set_property(label, [f"{value[0]}:{value[1]}"])

    def get_number_simple_text(self, label: str):
        pair = self._compose(label)
        if pair is None:
            return None
        number = _to_number(pair[0])
        if number is None:
            return None
        return number, decode_simple_text(pair[1])

    def set_number_simple_text(self, label: str, value: tuple):
        self.set_property(label, [f"{value[0]}:{encode_text(value[1])}"])


class Collection(UserList):
    """
    An SGF collection. Instance attributes:
      - self[.data] : list of [Node] -- one root node per game."""

    def __str__(self):
        """SGF representation. Game trees are written back to back."""
        return "".join(str(x) for x in self)

    def count_nodes(self):
        return sum(1 for root in self for _ in root.walk())

    def save_to_file(self, path_to_save):
        with open(path_to_save, mode='w', encoding='utf-8', newline='') as f:
            f.write(str(self))
