"""
=============================================
 Smart Game Format Parser Library: sgfpeg
=============================================

Parses SGF collections into trees of [Node] and reads/writes property values
with the SGF text escaping rules.

    >>> from sgfpeg import parse
    >>> root = parse("(;FF[4]SZ[19];B[pd];W[dp])")[0]
    >>> root.get_number("SZ")
    19
"""

from .parser import parse, parse_file
from .scanner import ParseError
from .sgflib import Collection, DuplicatePropertyError, Node, Property
from .text import decode_simple_text, decode_text, encode_text

__version__ = '1.0.0'

__all__ = [
    'Collection',
    'DuplicatePropertyError',
    'Node',
    'ParseError',
    'Property',
    'decode_simple_text',
    'decode_text',
    'encode_text',
    'parse',
    'parse_file',
]
