"""
Selenium-backed page access for topic extraction.

Selenium calls block, so every driver call (including the ``WebDriverWait``
polls) runs in ``asyncio.to_thread``. A cancelled caller stops waiting right
away; the worker thread finishes its current wait on its own.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from typing import Any, AsyncIterator

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from .config import BROWSER, HEADLESS, PAGE_TIMEOUT, POLL_INTERVAL, WINDOW_SIZE
from .errors import BrowserError, EvaluationError, PageTimeoutError

logger = logging.getLogger(__name__)

_STABLE_PROBE_SCRIPT = (
    "return [document.readyState, document.getElementsByTagName('*').length];"
)


def create_driver(browser: str = BROWSER, headless: bool = HEADLESS):
    """Start a local Firefox (default) or Chrome driver."""
    if browser == "chrome":
        options = webdriver.ChromeOptions()
        if headless:
            options.add_argument("--headless=new")
        driver = webdriver.Chrome(options=options)
    elif browser == "firefox":
        options = webdriver.FirefoxOptions()
        if headless:
            options.add_argument("-headless")
        driver = webdriver.Firefox(options=options)
    else:
        raise ValueError(f"Unsupported browser: {browser}")
    driver.set_window_size(*WINDOW_SIZE)
    driver.set_page_load_timeout(PAGE_TIMEOUT)
    return driver


class SeleniumPage:
    """Async view of one WebDriver window."""

    def __init__(self, driver, poll_interval: float = POLL_INTERVAL):
        self.driver = driver
        self.poll_interval = poll_interval

    async def navigate(self, url: str) -> None:
        """Load ``url``; a slow or failed load is logged and left to the readiness gate."""
        try:
            await asyncio.to_thread(self.driver.get, url)
        except TimeoutException:
            logger.warning("Page load of %s timed out, continuing", url)
        except WebDriverException as exc:
            logger.warning("Page load of %s failed, continuing: %s", url, exc.msg)

    async def evaluate(self, script: str, *args: Any) -> Any:
        try:
            return await asyncio.to_thread(self.driver.execute_script, script, *args)
        except WebDriverException as exc:
            raise EvaluationError(f"script failed in page: {exc.msg}") from exc

    async def await_predicate(self, script: str, timeout: float) -> None:
        """Poll ``script`` until it returns a truthy value or ``timeout`` passes."""
        wait = WebDriverWait(self.driver, timeout, poll_frequency=self.poll_interval)
        try:
            await asyncio.to_thread(wait.until, lambda driver: driver.execute_script(script))
        except TimeoutException as exc:
            raise PageTimeoutError(
                f"page not ready after {timeout:.1f} seconds: {script}"
            ) from exc
        except WebDriverException as exc:
            raise EvaluationError(f"script failed in page: {exc.msg}") from exc

    async def wait_stable(self, timeout: float) -> None:
        """
        Wait until the document is loaded and its element count stops changing.

        Best effort: on timeout a warning is logged and the caller carries on.
        """
        previous = []

        def settled(driver) -> bool:
            state, count = driver.execute_script(_STABLE_PROBE_SCRIPT)
            done = state == "complete" and previous[-1:] == [count]
            previous[:] = [count] if state == "complete" else []
            return done

        wait = WebDriverWait(self.driver, timeout, poll_frequency=self.poll_interval)
        try:
            await asyncio.to_thread(wait.until, settled)
        except TimeoutException:
            logger.warning("Page did not settle within %.1f seconds, continuing", timeout)
        except WebDriverException as exc:
            logger.warning("Page stability check failed, continuing: %s", exc.msg)


async def await_ready(page, predicate: str, timeout: float, settle_delay: float) -> None:
    """
    Block until ``predicate`` is true in the page, then wait ``settle_delay``.

    The predicate only proves the state object exists; the settle delay gives
    the page's own async rendering time to fill it in.
    """
    await page.await_predicate(predicate, timeout)
    await asyncio.sleep(settle_delay)


async def _start_driver(browser: str, headless: bool):
    # a driver that finishes starting after the caller was cancelled is quit
    # by the starting thread itself
    lock = threading.Lock()
    state = {"abandoned": False, "driver": None}

    def start():
        driver = create_driver(browser, headless)
        with lock:
            if not state["abandoned"]:
                state["driver"] = driver
                return driver
        logger.info("Browser started after the extraction was cancelled, quitting it")
        driver.quit()
        return None

    try:
        return await asyncio.to_thread(start)
    except asyncio.CancelledError:
        with lock:
            state["abandoned"] = True
            driver = state["driver"]
        if driver is not None:
            asyncio.get_running_loop().run_in_executor(None, driver.quit)
        raise
    except WebDriverException as exc:
        raise BrowserError(f"failed to start {browser}: {exc.msg}") from exc


@contextlib.asynccontextmanager
async def open_page(browser: str = BROWSER, headless: bool = HEADLESS) -> AsyncIterator[SeleniumPage]:
    """Open a dedicated browser for one extraction and always quit it afterwards."""
    driver = await _start_driver(browser, headless)
    try:
        yield SeleniumPage(driver)
    finally:
        await asyncio.to_thread(driver.quit)
