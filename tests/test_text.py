from sgfpeg.text import decode_simple_text, decode_text, encode_text


def test_decode_text():
    assert decode_text("[test\\\ntest\\:\\]") == "[testtest:]"


def test_decode_text_soft_line_breaks():
    assert decode_text("a\\\r\nb") == "ab"
    assert decode_text("a\\\n\rb") == "ab"
    assert decode_text("a\\\rb") == "ab"
    assert decode_text("a\\\nb") == "ab"


def test_decode_text_keeps_hard_line_breaks():
    assert decode_text("text\ntext") == "text\ntext"
    assert decode_text("a\r\nb") == "a\r\nb"


def test_decode_text_removes_soft_breaks_before_unescaping():
    # An escaped backslash before a newline: the second backslash starts a soft break.
    assert decode_text("a\\\\\n") == "a\\"
    assert decode_text("\\\\") == "\\"
    assert decode_text("\\a\\b") == "ab"


def test_decode_simple_text():
    assert decode_simple_text("test\ntest\r\ntest\n\rtest\rtest") == "test test test test test"


def test_decode_simple_text_soft_break():
    assert decode_simple_text("simple\\\ntext\nsimple") == "simpletext simple"


def test_encode_text():
    assert encode_text("]\\:") == "\\]\\\\\\:"
    assert encode_text("plain text") == "plain text"
    assert encode_text("a[b]") == "a[b\\]"


def test_encode_text_does_not_add_soft_breaks():
    assert encode_text("line 1\nline 2") == "line 1\nline 2"
    assert encode_text(decode_text("long\\\nline")) == "longline"
