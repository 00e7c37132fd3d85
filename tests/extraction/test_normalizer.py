"""Tests for paragraph markup normalization."""
import pytest

from article_fetcher.extraction.normalizer import ContentNormalizer


class TestContentNormalizer:

    def setup_method(self):
        self.normalizer = ContentNormalizer()

    def test_plain_text_unchanged(self):
        assert self.normalizer.normalize("A  \nB  \n") == "A  \nB  \n"

    def test_entities_unescaped(self):
        assert self.normalizer.normalize("Tom &amp; Jerry &quot;x&quot;  \n") == 'Tom & Jerry "x"  \n'

    def test_italic_removed_with_content(self):
        assert self.normalizer.normalize("photo<i>（美联社）</i> caption  \n") == "photo caption  \n"

    def test_italic_with_attributes_removed(self):
        assert self.normalizer.normalize('a<i class="c">b</i>c') == "ac"

    def test_iframe_removed(self):
        body = '<iframe src="https://www.youtube.com/embed/x" width="560"></iframe>text  \n'
        assert self.normalizer.normalize(body) == "text  \n"

    def test_escaped_markup_is_stripped_after_unescape(self):
        assert self.normalizer.normalize("&lt;i&gt;hidden&lt;/i&gt;shown") == "shown"

    @pytest.mark.parametrize("body,expected", [
        ("<b>Bold</b>", "**Bold**  \n"),
        ("<strong>Bold</strong>", "**Bold**  \n"),
        ("a<b>b</b>c", "a**b**  \nc"),
    ])
    def test_bold_translated(self, body, expected):
        assert self.normalizer.normalize(body) == expected

    def test_line_break_tags_dropped(self):
        assert self.normalizer.normalize("a<br/>b<br>c<br />d") == "abcd"

    def test_double_newline_collapsed(self):
        assert self.normalizer.normalize("a\n\nb") == "a\nb"

    def test_empty_bold_pair_collapsed(self):
        assert self.normalizer.normalize("<b></b>text") == "  \ntext"
        assert self.normalizer.normalize("<strong> </strong>") == "  \n"

    def test_italic_tag_does_not_eat_iframe(self):
        body = 'x<iframe src="v"></iframe>y<i>z</i>'
        assert self.normalizer.normalize(body) == "xy"
