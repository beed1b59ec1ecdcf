import os
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path


SRC_DIR = Path(__file__).resolve().parent

DEFAULT_BASE_URL = "http://localhost:8083"
DEFAULT_PROBE_TIMEOUT_MS = 5000
DEFAULT_SCREENSHOT_DELAY_MS = 2000


def _int_env(environ, key: str, default: int) -> int:
    try:
        return int(environ.get(key, str(default)))
    except ValueError:
        return default


def default_engine_command() -> list[str]:
    return [sys.executable, str(SRC_DIR / "runner.py")]


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    probe_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS
    report_dir: Path = Path("playwright-report")
    results_dir: Path = Path("test-results")
    screenshot_delay_ms: int = DEFAULT_SCREENSHOT_DELAY_MS
    engine_command: list[str] = field(default_factory=default_engine_command)

    @property
    def report_path(self) -> Path:
        return self.report_dir / "index.html"


def load_settings(environ=None) -> Settings:
    """Read settings from the environment, falling back to the dev-server defaults."""
    env = os.environ if environ is None else environ
    engine = env.get("SOLACE_E2E_ENGINE", "").strip()
    return Settings(
        base_url=env.get("SOLACE_BASE_URL", DEFAULT_BASE_URL).rstrip("/") or DEFAULT_BASE_URL,
        probe_timeout_ms=max(1, _int_env(env, "SOLACE_PROBE_TIMEOUT_MS", DEFAULT_PROBE_TIMEOUT_MS)),
        report_dir=Path(env.get("SOLACE_REPORT_DIR", "playwright-report")),
        results_dir=Path(env.get("SOLACE_RESULTS_DIR", "test-results")),
        screenshot_delay_ms=max(0, _int_env(env, "SCREENSHOT_DELAY_MS", DEFAULT_SCREENSHOT_DELAY_MS)),
        engine_command=shlex.split(engine) if engine else default_engine_command(),
    )
