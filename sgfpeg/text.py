"""
Escaping rules for SGF Text and SimpleText property values.

Values are stored raw by the parser; these functions interpret them when a
property is read and escape them again when a property is written.
"""

import re

reSoftLineBreak = re.compile(r'\\(\r\n|\n\r|\n|\r)')  # backslash + CRLF, LFCR, LF, CR
reEscapedChar = re.compile(r'\\(.)')
reLineBreak = re.compile(r'\r\n|\n\r|\n|\r')
reCharsToEscape = re.compile(r'([\]\\:])')  # characters that need to be \escaped


def decode_text(text: str):
    """Removes soft line breaks first, then the remaining backslash escapes."""
    text = reSoftLineBreak.sub('', text)
    return reEscapedChar.sub(r'\1', text)


def decode_simple_text(text: str):
    """Like [decode_text()], but hard line breaks become a single space."""
    return reLineBreak.sub(' ', decode_text(text))


def encode_text(text: str):
    """Adds backslash-escapes to property value characters that need them."""
    return reCharsToEscape.sub(r'\\\1', text)
