"""Tests for splitting tutor replies into English and translation."""
from models import FALLBACK_TRANSLATION
from splitter import split_content


def test_marker_split():
    english, translation = split_content('Hello world\n<div class="translation">你好世界</div>')
    assert english == "Hello world"
    assert translation == "你好世界"


def test_last_line_split_without_marker():
    english, translation = split_content("Line one\nLine two\n最后一行")
    assert english == "Line one\nLine two"
    assert translation == "最后一行"


def test_single_line_falls_back():
    english, translation = split_content("SingleLineNoMarker")
    assert english == "SingleLineNoMarker"
    assert translation == FALLBACK_TRANSLATION


def test_marker_wins_over_lines():
    content = 'First\nSecond\n<div class="translation">第一\n第二</div>\n'
    english, translation = split_content(content)
    assert english == "First\nSecond"
    assert translation == "第一\n第二"


def test_only_first_closing_div_removed():
    content = 'Use <b>this</b>.<div class="translation">用<div>这个</div>。</div>'
    english, translation = split_content(content)
    assert english == "Use <b>this</b>."
    assert translation == "用<div>这个。</div>"


def test_everything_after_first_marker_is_translation():
    content = 'A<div class="translation">甲<div class="translation">乙</div>'
    english, translation = split_content(content)
    assert english == "A"
    assert translation == '甲<div class="translation">乙'


def test_marker_without_closing_div():
    english, translation = split_content('Hi <div class="translation">  嗨  ')
    assert english == "Hi"
    assert translation == "嗨"


def test_trailing_newline_gives_empty_translation():
    english, translation = split_content("Hello\n")
    assert english == "Hello"
    assert translation == ""


def test_lines_are_trimmed():
    english, translation = split_content("  Good morning.  \n  Nice to meet you.\n   早上好。  ")
    assert english == "Good morning.  \n  Nice to meet you."
    assert translation == "早上好。"
