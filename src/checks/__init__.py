import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable

from diagnostics import ErrorCollector
from report import sanitize_for_filename


APP_NAME = "Solace"
NAVIGATION_TIMEOUT_MS = 30000

# Imported in this order; registration order is run order
CHECK_MODULES = (
    "checks.app_load",
    "checks.navigation",
    "checks.content",
    "checks.accessibility",
    "checks.performance",
    "checks.responsive",
    "checks.resilience",
    "checks.quick",
)


@dataclass
class CheckContext:
    page: object
    base_url: str
    project: str
    screenshots_dir: Path
    settle_ms: int = 2000
    verbose: bool = False
    errors: ErrorCollector = field(default_factory=ErrorCollector)
    check_title: str = ""
    shots: list = field(default_factory=list)

    def log(self, message: str) -> None:
        if self.verbose:
            print(f"   → {message}")

    async def open(self, path: str = "/", wait_until: str = "networkidle"):
        url = self.base_url.rstrip("/") + "/" + path.lstrip("/")
        self.log(f"Opening {url}")
        response = await self.page.goto(url, wait_until=wait_until, timeout=NAVIGATION_TIMEOUT_MS)
        if self.settle_ms > 0:
            await self.page.wait_for_timeout(self.settle_ms)
        return response

    def screenshot_path(self, label: str) -> Path:
        index = len(self.shots) + 1
        filename = f"{sanitize_for_filename(self.check_title) or 'check'}_{index:02d}_{sanitize_for_filename(label) or 'shot'}.png"
        return self.screenshots_dir / filename

    async def screenshot(self, label: str) -> Path:
        shot = self.screenshot_path(label)
        shot.parent.mkdir(parents=True, exist_ok=True)
        await self.page.screenshot(path=str(shot), full_page=True)
        self.shots.append(shot)
        self.log(f"📸 Screenshot saved: {shot.name}")
        return shot

    async def body_text(self) -> str:
        return (await self.page.text_content("body")) or ""

    async def count(self, selector: str) -> int:
        return await self.page.locator(selector).count()


@dataclass(frozen=True)
class Verification:
    title: str
    func: Callable[[CheckContext], Awaitable[None]]
    projects: tuple[str, ...] | None = None

    def applies_to(self, project: str) -> bool:
        return self.projects is None or project in self.projects


_REGISTRY: list[Verification] = []


def verification(title: str, projects: tuple[str, ...] | None = None):
    def decorator(func):
        if any(v.title == title for v in _REGISTRY):
            raise ValueError(f"Duplicate verification title: {title}")
        _REGISTRY.append(Verification(title=title, func=func, projects=projects))
        return func
    return decorator


def all_verifications() -> list[Verification]:
    for module in CHECK_MODULES:
        importlib.import_module(module)
    return list(_REGISTRY)
