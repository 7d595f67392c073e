#!/usr/bin/env python3
"""
Step 1 — Listing Scraper
- Fetches one static IMDb listing page (requests, Selenium, or a saved HTML file)
- Extracts title, year, runtime, genre, rating, metascore and votes by CSS selector
- Fills known gaps with NaN, drops the corrupt record, builds one table
- Saves the table to CSV and renders the runtime/rating box-plot

Every failure is fatal: no partial CSV and no chart.
"""

import os, re, argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd
import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from sequence_align import (
    LengthMismatch, ListingError, assemble, insert_sentinels, remove_at,
)
from make_listing_chart import CHART_DIR, CHART_FILE, render_boxplot

# ============ CONFIG ============
# One snapshot of one page: selectors, counts and gap positions are data, not logic.
LISTING_URL = os.getenv(
    "LISTING_URL",
    "https://www.imdb.com/search/title/?count=30&release_date=2016,2016&title_type=feature",
)
EXPECTED_RECORDS = int(os.getenv("EXPECTED_RECORDS", "30"))
TIMEOUT = 20
UA = ("Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
      "(KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36")

SELECTORS = {
    "title": ".lister-item-header a",
    "year": ".lister-item-year.text-muted.unbold",
    "runtime": ".text-muted .runtime",
    "genre": ".text-muted .genre",
    "rating": ".ratings-imdb-rating strong",
    "metascore": ".metascore",
    "votes": ".sort-num_votes-visible span:nth-child(2)",
}

# metascore is missing for movies 2, 3, 4, 17 and 29 of the snapshot
FIELD_GAPS = {"metascore": [1, 1, 1, 13, 24]}
DROP_RECORD_INDEX = 17  # 0-based: the 18th movie

OUT_CSV = "movies_listing.csv"


# ============ ERRORS ============
class FetchFailure(ListingError):
    pass


class NoNumericToken(ListingError, ValueError):
    pass


# ============ FETCH ============
def make_session():
    s = requests.Session()
    retries = Retry(
        total=4,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=frozenset(["GET", "HEAD"])
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    s.headers.update({"User-Agent": UA, "Accept-Language": "en-US,en;q=0.9"})
    return s


def fetch_page(url: str, session: Optional[requests.Session] = None, timeout: float = TIMEOUT) -> str:
    session = session or make_session()
    try:
        resp = session.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        raise FetchFailure(f"GET {url} failed: {e}") from e
    if not resp.ok:
        raise FetchFailure(f"GET {url} returned HTTP {resp.status_code}")
    return resp.text


def fetch_page_selenium(url: str, headless: bool = True) -> str:
    """Render the page in Chrome and return the DOM once loaded."""
    chrome_options = Options()
    if headless:
        chrome_options.add_argument("--headless=new")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")
    chrome_options.page_load_strategy = "eager"
    # reduce bandwidth (no images)
    chrome_options.add_experimental_option("prefs", {"profile.managed_default_content_settings.images": 2})

    try:
        driver = webdriver.Chrome(service=Service(ChromeDriverManager().install()), options=chrome_options)
    except (WebDriverException, requests.exceptions.RequestException, ValueError) as e:
        raise FetchFailure(f"Chrome could not start: {e}") from e
    try:
        driver.set_page_load_timeout(TIMEOUT)
        driver.get(url)
        return driver.page_source
    except WebDriverException as e:
        raise FetchFailure(f"Selenium GET {url} failed: {e}") from e
    finally:
        driver.quit()


def load_markup(path: Union[str, Path]) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise FetchFailure(f"cannot read {path}: {e}") from e


# ============ EXTRACT ============
def parse_markup(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def extract_field(markup: Union[str, BeautifulSoup], selector: str) -> List[str]:
    """Text of every element matching selector, in document order ([] when nothing matches)."""
    soup = markup if isinstance(markup, BeautifulSoup) else parse_markup(markup)
    return [tag.get_text() for tag in soup.select(selector)]


# ============ NORMALIZE ============
NUMBER_RE = re.compile(r"\d[\d,]*(?:\.\d+)?")


def trim(text: str) -> str:
    return re.sub(r"[\r\n]+", "", text).strip()


def parse_number(text: str) -> Union[int, float]:
    """First number in text: '(2016)' -> 2016, '123 min' -> 123, '1,234' -> 1234, '7.8' -> 7.8."""
    m = NUMBER_RE.search(text or "")
    if not m:
        raise NoNumericToken(f"no number in {text!r}")
    token = m.group(0).replace(",", "")
    return float(token) if "." in token else int(token)


def primary_genre(text: str) -> str:
    return trim(text).split(",")[0].strip()


NORMALIZERS: Dict[str, Callable[[str], Any]] = {
    "title": trim,
    "year": parse_number,
    "runtime": parse_number,
    "genre": primary_genre,
    "rating": parse_number,
    "metascore": parse_number,
    "votes": parse_number,
}


def normalize_field(raw: Sequence[str], normalizer: Callable[[str], Any]) -> List[Any]:
    return [normalizer(text) for text in raw]


# ============ CONTEXT ============
@dataclass
class ScrapeContext:
    """Named field sequences of one scrape, index-aligned once gaps are filled."""

    url: str
    markup: str = ""
    fields: Dict[str, List[Any]] = field(default_factory=dict)

    def add_field(self, name: str, values: Sequence[Any]):
        self.fields[name] = list(values)

    def fill_gaps(self, name: str, positions: Sequence[int], sentinel: Any = np.nan):
        self.fields[name] = insert_sentinels(self.fields[name], positions, [sentinel] * len(positions))

    def lengths(self) -> Dict[str, int]:
        return {name: len(values) for name, values in self.fields.items()}

    def check_cardinality(self, expected: int):
        wrong = {name: n for name, n in self.lengths().items() if n != expected}
        if wrong:
            raise LengthMismatch(f"expected {expected} records per field, got {wrong}")

    def drop_record(self, index: int):
        lengths = set(self.lengths().values())
        if len(lengths) > 1:
            raise LengthMismatch(f"cannot drop record {index} from unaligned fields: {self.lengths()}")
        self.fields = {name: remove_at(values, index) for name, values in self.fields.items()}

    def to_frame(self) -> pd.DataFrame:
        return assemble(self.fields)


def scrape_listing(markup: str,
                   url: str = LISTING_URL,
                   selectors: Dict[str, str] = SELECTORS,
                   gaps: Dict[str, List[int]] = FIELD_GAPS,
                   expected: Optional[int] = EXPECTED_RECORDS,
                   drop_index: Optional[int] = DROP_RECORD_INDEX) -> ScrapeContext:
    ctx = ScrapeContext(url=url, markup=markup)
    soup = parse_markup(markup)
    for name, selector in selectors.items():
        raw = extract_field(soup, selector)
        if not raw:
            print(f"⚠️  No match for {name!r} ({selector})")
        ctx.add_field(name, normalize_field(raw, NORMALIZERS.get(name, trim)))

    for name, positions in gaps.items():
        if name in ctx.fields:
            ctx.fill_gaps(name, positions)

    if expected is not None:
        ctx.check_cardinality(expected)
    if drop_index is not None:
        ctx.drop_record(drop_index)
    return ctx


# ============ SAVE ============
def save_csv(df: pd.DataFrame, filename: str):
    df.to_csv(filename, index=False, encoding="utf-8")
    print(f"💾 Saved {len(df)} rows → {filename}")


# ============ ENTRY POINT ============
def run(url=LISTING_URL, html=None, expected=EXPECTED_RECORDS, out_csv=OUT_CSV,
        chart=True, selenium=False, headless=True, chart_dir=CHART_DIR):
    print("\n🎯 Starting listing scraper...")
    if html:
        markup = load_markup(html)
    elif selenium:
        markup = fetch_page_selenium(url, headless=headless)
    else:
        markup = fetch_page(url)

    ctx = scrape_listing(markup, url=url, expected=expected)
    df = ctx.to_frame()
    print(f"✅ Assembled {df.shape[0]} movies × {df.shape[1]} fields")
    print(df.describe())
    save_csv(df, out_csv)

    if chart:
        render_boxplot(df, "runtime", "rating", "genre", Path(chart_dir) / CHART_FILE)
    return df


def main(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument("--url", default=LISTING_URL)
    p.add_argument("--html", help="Parse a saved HTML file instead of fetching")
    p.add_argument("--expected", type=int, default=EXPECTED_RECORDS)
    p.add_argument("--out", default=OUT_CSV)
    p.add_argument("--chart-dir", default=CHART_DIR)
    p.add_argument("--no-chart", action="store_true")
    p.add_argument("--selenium", action="store_true", help="Render the page with Chrome")
    p.add_argument("--no-headless", action="store_true", help="Run Selenium with a visible browser")
    args = p.parse_args(argv)

    try:
        run(url=args.url, html=args.html, expected=args.expected, out_csv=args.out,
            chart=not args.no_chart, selenium=args.selenium, headless=not args.no_headless,
            chart_dir=args.chart_dir)
    except ListingError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
