"""Entry point for linkrss: python -m linkrss --data DIR"""

import argparse
import logging
import os
import sys

import uvicorn

from linkrss.errors import ConfigError
from linkrss.extractor import TitleExtractor, scan_title
from linkrss.fetch import TOR_PROXY_URL, build_fetcher
from linkrss.registry import load_channels
from linkrss.web import create_app

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"

logger = logging.getLogger("linkrss")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="linkrss",
        description="Serve RSS feeds built from pages added by URL.",
    )
    parser.add_argument(
        "--data",
        default=os.environ.get("LINKRSS_DATA_DIR", ""),
        help="Directory holding one <name>.yaml file per channel",
    )
    parser.add_argument(
        "--assets",
        default=os.environ.get("LINKRSS_ASSETS_DIR", ""),
        help="Directory with templates/ and static/ (default: bundled assets)",
    )
    parser.add_argument(
        "--prefix",
        default=os.environ.get("LINKRSS_PREFIX", ""),
        help="URL path prefix for all routes",
    )
    parser.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help="Address to listen on",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("LINKRSS_PORT", DEFAULT_PORT)),
        help="Server port",
    )
    parser.add_argument(
        "--torify",
        action="store_true",
        help=f"Route page fetches through the SOCKS5 proxy at {TOR_PROXY_URL}",
    )
    parser.add_argument(
        "--proxy",
        default=None,
        help="Proxy URL to use instead of the default when --torify is set",
    )
    parser.add_argument(
        "--fetch-timeout",
        type=float,
        default=None,
        help="Page fetch timeout in seconds (default: no timeout)",
    )
    args = parser.parse_args(argv)
    if not args.data:
        parser.print_usage(sys.stderr)
        parser.exit(2, f"{parser.prog}: error: --data is required\n")
    return args


def main(argv: list[str] | None = None) -> int:
    """Load every channel and serve them until interrupted."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    # Quiet noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)

    proxy_url = (args.proxy or TOR_PROXY_URL) if args.torify else None
    fetcher = build_fetcher(proxy_url=proxy_url, timeout=args.fetch_timeout)
    extractor = TitleExtractor(fetcher, scan_title)

    logger.info("Reading configuration...")
    try:
        channels = load_channels(args.data, extractor)
    except ConfigError as e:
        logger.error("%s", e)
        fetcher.close()
        return 1

    app = create_app(channels, prefix=args.prefix, assets_dir=args.assets or None)
    try:
        uvicorn.run(app, host=args.host, port=args.port)
    finally:
        fetcher.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
