"""Test URL collection for the one-shot fetch script."""
import argparse

from article_fetcher.scripts.fetch_once import read_urls


def test_read_urls_merges_file_and_arguments(tmp_path):
    urls_file = tmp_path / "urls.txt"
    urls_file.write_text("# mandarin\nhttps://www.rfa.org/b.html\n\n  https://www.rfa.org/c.html  \n", encoding="utf-8")

    args = argparse.Namespace(urls=["https://www.rfa.org/a.html"], urls_file=str(urls_file))
    assert read_urls(args) == [
        "https://www.rfa.org/a.html",
        "https://www.rfa.org/b.html",
        "https://www.rfa.org/c.html",
    ]


def test_read_urls_without_file():
    args = argparse.Namespace(urls=[], urls_file=None)
    assert read_urls(args) == []
