"""
Flask HTTP surface for the scraper.
/scrape?url=... or POST { url, proxy (optional), waitMs (optional) }
/crawl?url=...&limit=10 or POST { url, limit, proxy, sameSite }
"""

from datetime import datetime, timezone

from flask import Flask, jsonify, request

from scraper.core import ServiceConfig, configure_logging, logger
from scraper.js_engine import PlaywrightDriver
from scraper.models import CrawlRequest, ScrapeRequest
from scraper.service import ScrapeService
from scraper.url_utils import safe_url


class InvalidRequestError(Exception):
    """Client input error, reported as 400 before any browser work starts."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


def _request_params():
    """GET reads the query string; other methods read the JSON body (form fields as fallback)."""
    if request.method == "GET":
        return request.args
    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form


def _url_param(params):
    url = safe_url(params.get("url"))
    if not url:
        raise InvalidRequestError("Missing or invalid url")
    return url


def _proxy_param(params):
    proxy = params.get("proxy") or None
    if proxy is not None and not isinstance(proxy, str):
        raise InvalidRequestError("Invalid proxy")
    return proxy


def _int_param(params, key, default):
    raw = params.get(key)
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise InvalidRequestError(f"Invalid {key}")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"Invalid {key}")
    if value < 0:
        raise InvalidRequestError(f"Invalid {key}")
    return value


def _bool_param(params, key):
    raw = params.get(key)
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def parse_scrape_request(params, config: ServiceConfig) -> ScrapeRequest:
    return ScrapeRequest(
        url=_url_param(params),
        proxy=_proxy_param(params),
        wait_ms=_int_param(params, "waitMs", config.default_wait_ms),
    )


def parse_crawl_request(params, config: ServiceConfig) -> CrawlRequest:
    return CrawlRequest(
        url=_url_param(params),
        proxy=_proxy_param(params),
        limit=_int_param(params, "limit", config.default_crawl_limit),
        same_site=_bool_param(params, "sameSite"),
    )


def create_app(config=None, service=None):
    """
    Application factory. Configuration and the service are explicit so tests
    can swap the browser driver out.
    """
    config = config or ServiceConfig.from_env()
    configure_logging(config)
    service = service or ScrapeService(PlaywrightDriver(config), config)

    app = Flask(__name__)
    app.config["SCRAPER_CONFIG"] = config

    @app.errorhandler(InvalidRequestError)
    def invalid_request(error):
        logger.info(f"[API] Rejected {request.method} {request.path}: {error.message}")
        return jsonify({"error": error.message}), 400

    @app.route("/scrape", methods=["GET", "POST"])
    def scrape():
        scrape_request = parse_scrape_request(_request_params(), config)
        try:
            payload = service.scrape(scrape_request)
        except Exception as e:
            logger.exception(f"[API] Scrape failed for {scrape_request.url}")
            return jsonify({"error": "Scrape failed", "details": str(e)}), 500
        return jsonify(payload)

    @app.route("/crawl", methods=["GET", "POST"])
    def crawl():
        crawl_request = parse_crawl_request(_request_params(), config)
        try:
            payload = service.crawl(crawl_request)
        except Exception as e:
            logger.exception(f"[API] Crawl failed for {crawl_request.url}")
            return jsonify({"error": "Crawl failed", "details": str(e)}), 500
        return jsonify(payload)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "healthy",
            "service": "slim-scraper",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    return app
