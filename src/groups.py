from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class TestGroup:
    name: str
    description: str
    projects: tuple[str, ...]
    extra_args: tuple[str, ...] = ()


_GROUPS = (
    TestGroup(
        name="all",
        description="Run every verification on every device project",
        projects=("comprehensive", "mobile-ios", "mobile-android", "mobile-desktop"),
    ),
    TestGroup(
        name="mobile",
        description="Run on mobile device projects only (iOS + Android)",
        projects=("mobile-ios", "mobile-android"),
    ),
    TestGroup(
        name="desktop",
        description="Run on the desktop browser project only",
        projects=("mobile-desktop",),
    ),
    TestGroup(
        name="comprehensive",
        description="Run the full suite on the primary mobile project (default)",
        projects=("comprehensive",),
    ),
    TestGroup(
        name="quick",
        description="Smoke run: Quick Validation checks on the primary project",
        projects=("comprehensive",),
        extra_args=("--grep", "Quick Validation"),
    ),
)

TEST_GROUPS = MappingProxyType({group.name: group for group in _GROUPS})

DEFAULT_GROUP = "comprehensive"


def lookup(name: str) -> TestGroup | None:
    return TEST_GROUPS.get(name)


def group_names() -> list[str]:
    return list(TEST_GROUPS)
