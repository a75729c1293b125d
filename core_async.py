"""
core_async.py — Async Analysis Orchestrator
────────────────────────────────────────────
Fetches a page with `httpx.AsyncClient`, then extracts its meta tags
and scores them.

Parsing and scoring are CPU-bound, so they run in a worker thread via
asyncio.to_thread() to keep the event loop free for other requests.
"""

from __future__ import annotations
import time
import asyncio
import logging
from typing import Optional

import httpx

from scanner.meta_extractor import extract_tags
from scanner.seo_checker    import AnalysisResult, evaluate


log = logging.getLogger("seoanalyzer.fetch")

FETCH_TIMEOUT = 10   # seconds
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept":          "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class FetchError(Exception):
    """The target page could not be downloaded (timeout, DNS, TLS, non-2xx...)."""

    def __init__(self, url: str, reason: str):
        super().__init__("Could not fetch {}: {}".format(url, reason))
        self.url = url
        self.reason = reason


# ─────────────────────────────────────────────────────────────────────────────
# Main async entry point
# ─────────────────────────────────────────────────────────────────────────────

async def run_analysis_async(url: str) -> AnalysisResult:
    """
    Fetch `url`, extract its tags and run the scoring engine.

    Raises FetchError if the page cannot be downloaded; the scoring
    engine is never invoked in that case.
    """
    html = await fetch_html(url)

    tags = await asyncio.to_thread(extract_tags, html, url)
    log.debug("Extracted {} meta tags from {}".format(len(tags.all_meta_tags), url))

    return await asyncio.to_thread(evaluate, tags)


# ─────────────────────────────────────────────────────────────────────────────
# Async HTTP fetcher
# ─────────────────────────────────────────────────────────────────────────────

async def fetch_html(url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    """
    Download the page body as text.
    Any transport failure or non-2xx response becomes a FetchError.
    """
    t0 = time.time()
    try:
        async with httpx.AsyncClient(
            headers=HEADERS,
            timeout=FETCH_TIMEOUT,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.TimeoutException as e:
        raise FetchError(url, "timed out after {}s".format(FETCH_TIMEOUT)) from e
    except httpx.HTTPStatusError as e:
        raise FetchError(url, "server returned HTTP {}".format(e.response.status_code)) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, str(e)[:120] or e.__class__.__name__) from e

    log.info("Fetched        url={}  status={}  {:.0f}ms".format(
        url, response.status_code, (time.time() - t0) * 1000))
    return response.text
