"""
Flask routes: parameter sourcing, validation and status codes.
"""

import unittest
from unittest.mock import MagicMock

from scraper.api import create_app
from scraper.core import ServiceConfig
from scraper.js_engine import RenderExecutionError


class TestApi(unittest.TestCase):
    def setUp(self):
        self.service = MagicMock()
        self.service.scrape.return_value = {"success": True, "url": "https://example.com/"}
        self.service.crawl.return_value = {"success": True, "origin": "https://example.com/", "results": []}
        self.app = create_app(ServiceConfig(), service=self.service)
        self.client = self.app.test_client()

    def test_scrape_get_reads_query(self):
        resp = self.client.get("/scrape?url=https://example.com/&proxy=http://p:8080&waitMs=3000")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {"success": True, "url": "https://example.com/"})
        scrape_request = self.service.scrape.call_args[0][0]
        self.assertEqual(scrape_request.url, "https://example.com/")
        self.assertEqual(scrape_request.proxy, "http://p:8080")
        self.assertEqual(scrape_request.wait_ms, 3000)

    def test_scrape_post_reads_json_body_with_defaults(self):
        resp = self.client.post("/scrape", json={"url": "https://example.com"})

        self.assertEqual(resp.status_code, 200)
        scrape_request = self.service.scrape.call_args[0][0]
        self.assertEqual(scrape_request.url, "https://example.com/")
        self.assertIsNone(scrape_request.proxy)
        self.assertEqual(scrape_request.wait_ms, 1200)

    def test_missing_or_invalid_url_is_rejected_before_driver(self):
        for path in ("/scrape", "/scrape?url=not-a-url", "/crawl?url=ftp://example.com/", "/crawl"):
            with self.subTest(path=path):
                resp = self.client.get(path)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.get_json(), {"error": "Missing or invalid url"})

        resp = self.client.post("/scrape", json={"proxy": "http://p:8080"})
        self.assertEqual(resp.status_code, 400)

        self.service.scrape.assert_not_called()
        self.service.crawl.assert_not_called()

    def test_invalid_numeric_options(self):
        resp = self.client.get("/scrape?url=https://example.com/&waitMs=soon")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json(), {"error": "Invalid waitMs"})

        resp = self.client.post("/crawl", json={"url": "https://example.com/", "limit": -1})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json(), {"error": "Invalid limit"})

        self.service.scrape.assert_not_called()
        self.service.crawl.assert_not_called()

    def test_fractional_numbers_rejected_like_strings(self):
        for body in ({"limit": 2.7}, {"limit": "2.7"}):
            with self.subTest(body=body):
                resp = self.client.post("/crawl", json=dict(body, url="https://example.com/"))
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.get_json(), {"error": "Invalid limit"})

        resp = self.client.post("/scrape", json={"url": "https://example.com/", "waitMs": 1500.5})
        self.assertEqual(resp.status_code, 400)
        self.service.scrape.assert_not_called()
        self.service.crawl.assert_not_called()

        resp = self.client.post("/crawl", json={"url": "https://example.com/", "limit": 3.0})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.service.crawl.call_args[0][0].limit, 3)

    def test_scrape_driver_failure_is_500(self):
        self.service.scrape.side_effect = RenderExecutionError("Browser failed on https://example.com/: crashed")

        resp = self.client.get("/scrape?url=https://example.com/")

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.get_json(), {
            "error": "Scrape failed",
            "details": "Browser failed on https://example.com/: crashed",
        })

    def test_crawl_defaults_and_options(self):
        resp = self.client.get("/crawl?url=https://example.com/")
        self.assertEqual(resp.status_code, 200)
        crawl_request = self.service.crawl.call_args[0][0]
        self.assertEqual(crawl_request.limit, 20)
        self.assertFalse(crawl_request.same_site)

        self.client.post("/crawl", json={"url": "https://example.com/", "limit": "5", "sameSite": True})
        crawl_request = self.service.crawl.call_args[0][0]
        self.assertEqual(crawl_request.limit, 5)
        self.assertTrue(crawl_request.same_site)

    def test_crawl_form_body(self):
        resp = self.client.post("/crawl", data={"url": "https://example.com/", "limit": "0"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.service.crawl.call_args[0][0].limit, 0)

    def test_crawl_driver_failure_is_500(self):
        self.service.crawl.side_effect = RuntimeError("launch failed")

        resp = self.client.post("/crawl", json={"url": "https://example.com/"})

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.get_json(), {"error": "Crawl failed", "details": "launch failed"})

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json()["status"], "healthy")


if __name__ == "__main__":
    unittest.main()
