import argparse
from dataclasses import replace

from scraper.api import create_app
from scraper.core import ServiceConfig, logger


def main(argv=None):
    parser = argparse.ArgumentParser(description="Slim Scraper API")
    parser.add_argument("--host", help="Interface to bind (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: PORT or 8080)")
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode")
    args = parser.parse_args(argv)

    config = ServiceConfig.from_env()
    if args.host:
        config = replace(config, host=args.host)
    if args.port:
        config = replace(config, port=args.port)

    app = create_app(config)
    logger.info(f"Slim Scraper API running on {config.port}")
    app.run(host=config.host, port=config.port, debug=args.debug, threaded=True)


if __name__ == "__main__":
    main()
