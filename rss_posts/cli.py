from __future__ import annotations

# Load .env before other imports that use env vars
from dotenv import load_dotenv
load_dotenv()

import argparse
import dataclasses
import logging
import time
from pathlib import Path

from rss_posts.logging_utils import configure_logging, log_event
from rss_posts.pipeline import run
from rss_posts.settings import load_settings


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Fetch configured RSS/Atom feeds into the site's posts JSON.")
    p.add_argument("--i18n-dir", help="directory holding {locale}.json files")
    p.add_argument("--output", help="path of the JSON document to write")
    p.add_argument("--locale", action="append", dest="locales", help="locale to process (repeatable)")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING ... (default: RSS_LOG_LEVEL or INFO)")
    args = p.parse_args(argv)

    configure_logging(args.log_level)

    settings = load_settings()
    overrides = {}
    if args.i18n_dir:
        overrides["i18n_dir"] = Path(args.i18n_dir)
    if args.output:
        overrides["output_path"] = Path(args.output)
    if args.locales:
        overrides["locales"] = tuple(args.locales)
    settings = dataclasses.replace(settings, **overrides)

    t0 = time.perf_counter()
    try:
        counts = run(settings)
    except Exception as exc:
        elapsed_ms = int((time.perf_counter() - t0) * 1000)
        log_event(
            "run_end",
            status="error",
            elapsed_ms=elapsed_ms,
            error_type=type(exc).__name__,
            error=str(exc),
            level=logging.ERROR,
        )
        print(f"ERROR output={settings.output_path} error={exc}")
        return 1

    elapsed_s = time.perf_counter() - t0
    log_event("run_end", status="ok", elapsed_ms=int(elapsed_s * 1000), counts=counts)

    per_locale = " ".join(f"{locale}={n}" for locale, n in counts.items())
    print(f"OK output={settings.output_path} {per_locale} elapsed_s={elapsed_s:.2f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
