from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class Project:
    name: str
    browser: str = "chromium"
    device: str | None = None
    viewport: dict | None = None
    is_mobile: bool = False
    has_touch: bool = False

    def context_options(self, devices: dict) -> dict:
        """Keyword arguments for browser.new_context(), starting from the Playwright device descriptor."""
        options: dict = {}
        if self.device:
            descriptor = dict(devices[self.device])
            descriptor.pop("default_browser_type", None)
            options.update(descriptor)
        if self.viewport:
            options["viewport"] = dict(self.viewport)
        if self.is_mobile:
            options["is_mobile"] = True
        if self.has_touch:
            options["has_touch"] = True
        return options


_PROJECTS = (
    # Primary target: the phone-sized viewport the app is designed for
    Project(
        name="comprehensive",
        viewport={"width": 375, "height": 812},
        is_mobile=True,
        has_touch=True,
    ),
    Project(name="mobile-ios", browser="webkit", device="iPhone 12"),
    Project(name="mobile-android", device="Pixel 5"),
    Project(name="mobile-desktop", viewport={"width": 1280, "height": 720}),
)

PROJECTS = MappingProxyType({project.name: project for project in _PROJECTS})
