"""
sensor.py - The Fetcher

Pulls a lottery game page and hands it to the matching provider.
Plain HTTP by default; Playwright when the page needs a browser to render.
This is the only module that performs I/O.
"""

import time
from typing import Optional

import requests
from opentelemetry import trace
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

import config
from logger import setup_logger
from models import RawGame
from providers import get_provider, provider_for_url

logger = setup_logger(__name__)
tracer = trace.get_tracer(__name__)


class FetchError(Exception):
    """The page could not be retrieved."""


def fetch_page(url: str, render: bool = False, timeout: float = config.FETCH_TIMEOUT) -> str:
    """Return the page HTML. Raises FetchError on any transport failure."""
    start_time = time.time()
    with tracer.start_as_current_span("fetch_page") as span:
        span.set_attribute("url", url)
        span.set_attribute("render", render)
        try:
            html = _render(url, timeout) if render else _get(url, timeout)
        except (requests.RequestException, PlaywrightError) as e:
            span.record_exception(e)
            span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
            logger.error("Page fetch failed", extra={"event": "fetch_failed", "url": url, "error": str(e)})
            raise FetchError(f"Failed to fetch page: {e}") from e

        duration_ms = int((time.time() - start_time) * 1000)
        span.set_attribute("html_size_kb", round(len(html) / 1024, 2))
        logger.info("Page fetched", extra={"event": "fetch_success", "url": url, "duration_ms": duration_ms})
        return html


def _get(url: str, timeout: float) -> str:
    response = requests.get(url, headers={"User-Agent": config.USER_AGENT}, timeout=timeout)
    response.raise_for_status()
    return response.text


def _render(url: str, timeout: float) -> str:
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            context = browser.new_context(user_agent=config.USER_AGENT)
            page = context.new_page()
            page.goto(url, timeout=int(timeout * 1000), wait_until="networkidle")
            return page.content()
        finally:
            browser.close()


def capture_game(url: str, state_code: Optional[str] = None, render: bool = False) -> RawGame:
    """Fetch a game page and parse it with the provider for its lottery."""
    provider = get_provider(state_code) if state_code else provider_for_url(url)
    if provider is None:
        raise ValueError(f"No provider registered for URL: {url}")
    html = fetch_page(url, render=render)
    return provider.extract_game(html, url=url)
