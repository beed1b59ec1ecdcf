"""Heuristics for explaining why the app did not come up in the browser.

A blank Expo web page usually means the JS bundle failed to build or load;
the cause is scattered across console errors, uncaught page errors, failed
requests and whatever error text the dev server rendered into the body.
"""

ROOT_SELECTORS = ("#root", "#expo-root", "[data-reactroot]")

# (needle in page text or error message, issue reported)
ISSUE_PATTERNS = [
    ("ECONNREFUSED", "Server connection refused - server may not be running"),
    ("Cannot GET", "Route not found - check server routing"),
    ("Module not found", "Module resolution error - check dependencies"),
    ("Unable to resolve module", "Module resolution error - check dependencies"),
    ("ChunkLoadError", "Bundle chunk failed to load - restart the dev server"),
    ("SyntaxError", "JavaScript syntax error - check bundle compilation"),
    ("TypeError", "JavaScript type error - check component props"),
]

NOISE_MARKERS = ("favicon", "source map", "devtools", "extension")


def extract_issues(*texts: str) -> list[str]:
    issues: list[str] = []
    for text in texts:
        if not text:
            continue
        for needle, issue in ISSUE_PATTERNS:
            if needle in text and issue not in issues:
                issues.append(issue)
    return issues


def is_critical(message: str) -> bool:
    lowered = (message or "").lower()
    return bool(lowered) and not any(marker in lowered for marker in NOISE_MARKERS)


def critical_errors(messages: list[str]) -> list[str]:
    return [m for m in messages if is_critical(m)]


class ErrorCollector:
    """Records console errors, uncaught page errors and failed requests for one page."""

    def __init__(self):
        self.console_errors: list[str] = []
        self.page_errors: list[str] = []
        self.failed_requests: list[str] = []

    def attach(self, page) -> "ErrorCollector":
        page.on("console", self._on_console)
        page.on("pageerror", self._on_page_error)
        page.on("requestfailed", self._on_request_failed)
        return self

    def _on_console(self, msg) -> None:
        if msg.type == "error":
            self.console_errors.append(msg.text)

    def _on_page_error(self, error) -> None:
        self.page_errors.append(getattr(error, "message", None) or str(error))

    def _on_request_failed(self, request) -> None:
        failure = request.failure or "failed"
        self.failed_requests.append(f"{request.url} ({failure})")

    @property
    def critical(self) -> list[str]:
        return critical_errors(self.console_errors) + list(self.page_errors)

    def summary(self) -> dict:
        return {
            "console_errors": len(self.console_errors),
            "critical_errors": self.critical[:5],
            "page_errors": self.page_errors[:5],
            "failed_requests": self.failed_requests[:5],
        }


def describe_failure(collector: ErrorCollector | None, body_text: str = "") -> str:
    """Short human-readable cause for a failed check, or '' when nothing stands out."""
    messages = []
    if collector is not None:
        messages.extend(collector.page_errors)
        messages.extend(critical_errors(collector.console_errors))
    issues = extract_issues(body_text, *messages)
    if issues:
        return "; ".join(issues)
    if collector is not None and collector.page_errors:
        return f"uncaught page error: {collector.page_errors[0]}"
    if collector is not None and collector.failed_requests:
        return f"{len(collector.failed_requests)} request(s) failed, first: {collector.failed_requests[0]}"
    if not (body_text or "").strip():
        return "page body is empty - bundle probably did not load"
    return ""


def _attribute(name: str):
    async def read(el):
        return await el.get_attribute(name)
    return read


async def _inner_text(el):
    return (await el.inner_text()).strip()


# inventory key -> (selector, how to read one element)
INVENTORY_SOURCES = {
    "testids": ("[data-testid]", _attribute("data-testid")),
    "aria_labels": ("[aria-label]", _attribute("aria-label")),
    "buttons": ("[role='button']", _inner_text),
    "links": ("[role='link']", _inner_text),
    "tabs": ("[role='tab']", _inner_text),
}


async def _distinct_values(page, selector: str, read, limit: int) -> list[str]:
    values: list[str] = []
    try:
        elements = await page.query_selector_all(selector)
    except Exception:
        return values
    for el in elements[:limit]:
        try:
            value = await read(el)
        except Exception:
            continue
        if value and value not in values:
            values.append(value)
    return values


async def build_element_inventory(page, limit: int = 200) -> dict:
    """What actually rendered: test ids, labels, role texts and which app roots exist."""
    inventory = {
        key: await _distinct_values(page, selector, read, limit)
        for key, (selector, read) in INVENTORY_SOURCES.items()
    }
    roots = []
    for sel in ROOT_SELECTORS:
        try:
            if await page.query_selector(sel):
                roots.append(sel)
        except Exception:
            continue
    inventory["roots"] = roots
    return inventory
