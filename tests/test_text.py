import io

from goblin.text import Prefixer, quoted_string


def test_prefixer_indents_following_lines():
    out = io.StringIO()
    Prefixer(out, "    ").write("a\nb")
    assert out.getvalue() == "a\n    b"


def test_prefixer_count_matches_output():
    out = io.StringIO()
    count = Prefixer(out, ">> ").write("one\ntwo\nthree\n")
    assert count == len(out.getvalue())


def test_prefixer_trailing_newline_ends_with_prefix():
    out = io.StringIO()
    Prefixer(out, "--").write("line\n")
    assert out.getvalue().endswith("\n--")


def test_prefixer_without_newline_is_unchanged():
    out = io.StringIO()
    Prefixer(out, "    ").write("plain text")
    assert out.getvalue() == "plain text"


def test_prefixer_empty_prefix_passes_through():
    out = io.StringIO()
    text = "x\ny\n"
    count = Prefixer(out).write(text)
    assert out.getvalue() == text
    assert count == len(text)


def test_prefixer_accumulates_across_writes():
    out = io.StringIO()
    prefixer = Prefixer(out, "  ")
    prefixer.write("a\n")
    prefixer.write("b")
    assert out.getvalue() == "a\n" + "  " + "b"


def test_quoted_string_escapes_quotes():
    assert quoted_string('say "hi"') == '"say \\"hi\\""'


def test_quoted_string_escapes_newline_and_tab():
    assert quoted_string("a\tb\nc") == '"a\\tb\\nc"'


def test_quoted_string_plain_text():
    assert quoted_string("hello") == '"' + "hello" + '"'


def test_quoted_string_leaves_backslash():
    assert quoted_string("a\\b") == '"' + "a\\b" + '"'


def test_quoted_string_has_no_raw_control_chars():
    result = quoted_string("line1\nline2\tend")
    assert result.startswith('"') and result.endswith('"')
    assert "\n" not in result and "\t" not in result