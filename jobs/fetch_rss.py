# Thin wrapper so the job can be run as `python jobs/fetch_rss.py` once the
# package is installed (`pip install -e .`); the `fetch-rss` script does the same.
from rss_posts.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
