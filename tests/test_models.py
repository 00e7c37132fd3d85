"""Test the Article model and identifiers."""
import hashlib
import pytest
from datetime import datetime, timedelta, timezone
from pydantic import ValidationError

from article_fetcher.config import SourceConfig
from article_fetcher.models.article import Article, article_id, website_id

SOURCE = SourceConfig(source_id="rfa", domain="www.rfa.org", title="自由亚洲电台")
URL = "https://www.rfa.org/mandarin/a.html"


class TestIdentifiers:

    def test_article_id_is_md5_of_url(self):
        assert article_id(URL) == hashlib.md5(URL.encode("utf-8")).hexdigest()

    def test_ids_stable_and_distinct(self):
        assert article_id(URL) == article_id(URL)
        assert article_id(URL) != article_id(URL + "?x=1")
        assert website_id("www.rfa.org") == hashlib.md5(b"www.rfa.org").hexdigest()


class TestArticle:

    def test_for_source(self):
        t = datetime(2021, 6, 1, 12, 0, tzinfo=timezone.utc)
        article = Article.for_source(SOURCE, URL, "Title", t, "# Title")

        assert article.id == article_id(URL)
        assert article.website_id == website_id("www.rfa.org")
        assert article.website_title == "自由亚洲电台"
        assert article.source_url == URL

    def test_update_time_normalized_to_utc(self):
        t = datetime(2021, 6, 1, 20, 0, tzinfo=timezone(timedelta(hours=8)))
        article = Article.for_source(SOURCE, URL, "Title", t, "body")
        assert article.update_time.utcoffset() == timedelta(0)
        assert article.update_time.hour == 12

    def test_naive_update_time_treated_as_utc(self):
        article = Article.for_source(SOURCE, URL, "Title", datetime(2021, 6, 1, 12, 0), "body")
        assert article.update_time.tzinfo == timezone.utc

    @pytest.mark.parametrize("field", ["id", "content"])
    def test_empty_required_fields_rejected(self, field):
        data = Article.for_source(SOURCE, URL, "Title", datetime(2021, 6, 1), "body").model_dump()
        data[field] = ""
        with pytest.raises(ValidationError):
            Article(**data)

    def test_json_round_trip(self):
        article = Article.for_source(SOURCE, URL, "Title", datetime(2021, 6, 1, tzinfo=timezone.utc), "body")
        assert Article.model_validate_json(article.model_dump_json()) == article
