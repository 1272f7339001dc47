"""
Link extraction from rendered HTML and per-link title enrichment.
"""

import unittest
from unittest.mock import MagicMock

from scraper.enrichment import enrich_titles
from scraper.models import LinkResult
from scraper.parser import extract_base_href, extract_links


class TestExtractLinks(unittest.TestCase):

    def test_raw_hrefs_in_document_order(self):
        html = """
        <html><body>
          <a href="/b">B</a>
          <p><a href="https://example.com/a">A</a></p>
          <a name="anchor-without-href">x</a>
          <a href="">empty</a>
          <a href="../c">C</a>
          <a href="/b">B again</a>
        </body></html>
        """
        self.assertEqual(extract_links(html), ["/b", "https://example.com/a", "../c", "/b"])

    def test_empty_document(self):
        self.assertEqual(extract_links(""), [])
        self.assertEqual(extract_links(None), [])

    def test_first_base_href(self):
        html = '<head><base target="_blank"><base href="/docs/"><base href="/other/"></head>'
        self.assertEqual(extract_base_href(html), "/docs/")
        self.assertIsNone(extract_base_href('<base href="  ">'))
        self.assertIsNone(extract_base_href("<a href=\"/x\">x</a>"))


class TestEnrichTitles(unittest.TestCase):

    def setUp(self):
        self.urls = ["https://example.com/a", "https://example.com/b", "https://example.com/c"]

    def test_failed_lookup_is_isolated(self):
        """Scenario: second lookup fails; first and third are unaffected."""
        lookup = MagicMock(side_effect=["Page A", TimeoutError("navigation timeout"), "Page C"])

        results = enrich_titles(self.urls, lookup)

        self.assertEqual(results, [
            LinkResult("https://example.com/a", "Page A"),
            LinkResult("https://example.com/b", None),
            LinkResult("https://example.com/c", "Page C"),
        ])
        self.assertEqual(lookup.call_count, 3)

    def test_lookups_follow_frontier_order(self):
        lookup = MagicMock(side_effect=lambda url: url.rsplit("/", 1)[-1])
        enrich_titles(self.urls, lookup)
        self.assertEqual([c.args[0] for c in lookup.call_args_list], self.urls)

    def test_missing_title_becomes_empty_string(self):
        results = enrich_titles(self.urls[:1], MagicMock(return_value=None))
        self.assertEqual(results[0].to_dict(), {"url": "https://example.com/a", "title": ""})

    def test_empty_frontier(self):
        lookup = MagicMock()
        self.assertEqual(enrich_titles([], lookup), [])
        lookup.assert_not_called()


if __name__ == "__main__":
    unittest.main()
