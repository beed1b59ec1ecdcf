#!/usr/bin/env python3

import argparse
import sys

from groups import DEFAULT_GROUP, TEST_GROUPS, lookup
from launcher import COULD_NOT_RUN_CODES, LaunchError, RunOptions, launch
from probe import ProbeResult, probe
from settings import Settings, load_settings


HELP_COMMANDS = ("help", "--help", "-h")

FLAG_LEGEND = (
    ("--headed", "Show the browser window while tests run"),
    ("--debug", "Headed, slowed down, with step-by-step output"),
)

ENV_LEGEND = (
    ("SOLACE_BASE_URL", "App URL to probe and test"),
    ("SOLACE_PROBE_TIMEOUT_MS", "How long to wait for the app to answer"),
    ("SOLACE_E2E_ENGINE", "Override the test engine command"),
)


def build_flag_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    parser.add_argument("--headed", action="store_true")
    parser.add_argument("--debug", action="store_true")
    return parser


def split_command(argv: list[str]) -> tuple[str, list[str]]:
    if argv and not argv[0].startswith("-"):
        return argv[0], argv[1:]
    if argv and argv[0] in HELP_COMMANDS:
        return argv[0], argv[1:]
    return DEFAULT_GROUP, list(argv)


def parse_run_flags(args: list[str]) -> tuple[RunOptions, list[str]]:
    known, passthrough = build_flag_parser().parse_known_args(args)
    return RunOptions(headed=known.headed, debug=known.debug), passthrough


def print_help(settings: Settings) -> None:
    print("🧪 Solace AI Mobile - UI verification runner")
    print()
    print("Usage: python run.py [command] [--headed] [--debug] [engine args...]")
    print()
    print("Commands:")
    width = max(len(name) for name in TEST_GROUPS)
    for name, group in TEST_GROUPS.items():
        default = " (default)" if name == DEFAULT_GROUP else ""
        print(f"  {name.ljust(width)}  {group.description}{default}")
        print(f"  {' ' * width}  projects: {', '.join(group.projects)}")
    print(f"  {'help'.ljust(width)}  Show this message")
    print()
    print("Flags:")
    for flag, text in FLAG_LEGEND:
        print(f"  {flag.ljust(10)}  {text}")
    print()
    print("Environment:")
    for key, text in ENV_LEGEND:
        print(f"  {key}  {text}")
    print(f"\nTarget: {settings.base_url}")


def main(argv: list[str] | None = None, *, probe_target=probe, launch_engine=launch, settings: Settings | None = None) -> int:
    settings = settings or load_settings()
    command, rest = split_command(list(sys.argv[1:] if argv is None else argv))

    if command in HELP_COMMANDS:
        print_help(settings)
        return 0

    options, passthrough = parse_run_flags(rest)

    group = lookup(command)
    if group is None:
        print(f"❌ Unknown command: {command}")
        print("   Run `python run.py help` to see the available commands.")
        return 1

    print(f"🔍 Checking that the app is up at {settings.base_url} ...")
    result = probe_target(settings.base_url, settings.probe_timeout_ms)
    if result is not ProbeResult.REACHABLE:
        reason = "timed out" if result is ProbeResult.TIMED_OUT else "refused the connection"
        print(f"❌ {settings.base_url} {reason}.")
        print("   Start the application first (e.g. `npm run web`), then re-run this command.")
        return 1
    print("✅ App is reachable")

    extra_args = list(group.extra_args) + passthrough
    print(f"🏃 Running '{group.name}': {group.description}")
    print(f"   projects: {', '.join(group.projects)}")
    if options.headed or options.debug:
        print(f"   mode: {'debug' if options.debug else 'headed'}")

    try:
        code = launch_engine(group.projects, extra_args, options, settings.engine_command)
    except LaunchError as exc:
        print(f"💥 Could not start the test engine: {exc}")
        print("   Check that Python and Playwright are installed (`playwright install`).")
        return 1

    if code == 0:
        print("✅ All selected tests passed.")
    elif code in COULD_NOT_RUN_CODES:
        print(f"⚠️ Tests could not run (exit code {code}): the engine rejected its arguments or nothing matched.")
        print("   Check the project names, --grep pattern and any extra flags above.")
        return code
    else:
        print(f"✖ Tests ran but some failed (exit code {code}).")
    print(f"📝 HTML report: {settings.report_path}")
    return code


if __name__ == "__main__":
    sys.exit(main())
