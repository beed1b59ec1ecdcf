#!/usr/bin/env python3

import argparse
import asyncio
import re
import sys
import time
from pathlib import Path

from playwright.async_api import async_playwright

from checks import CheckContext, Verification, all_verifications
from diagnostics import ErrorCollector, build_element_inventory, describe_failure
from launcher import ENGINE_NO_TESTS
from projects import PROJECTS, Project
from report import summarize, write_html_report, write_results_json
from settings import load_settings


DEBUG_SLOW_MO_MS = 500


def browser_launch_options(headed: bool = False, debug: bool = False) -> dict:
    # --debug implies a visible, slowed-down browser
    return {
        "headless": not (headed or debug),
        "slow_mo": DEBUG_SLOW_MO_MS if debug else 0,
    }


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solace UI verification engine")
    parser.add_argument("--project", action="append", required=True, help="Device project to run (repeatable)")
    parser.add_argument("--reporter", choices=("list", "html", "json"), default="list")
    parser.add_argument("--grep", help="Only run verifications whose title matches this pattern")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--debug", action="store_true", help="Headed, slowed down, verbose step output")
    parser.add_argument("--verbose", action="store_true", help="Print step logs")
    parser.add_argument("--base-url", default=settings.base_url, help="App URL under test")
    return parser


def resolve_projects(parser: argparse.ArgumentParser, names: list[str]) -> list[Project]:
    unknown = [n for n in names if n not in PROJECTS]
    if unknown:
        parser.error(f"unknown project(s): {', '.join(unknown)} (known: {', '.join(PROJECTS)})")
    return [PROJECTS[n] for n in names]


def select_verifications(verifications: list[Verification], project: str, grep: str | None = None) -> list[Verification]:
    pattern = re.compile(grep) if grep else None
    return [
        v for v in verifications
        if v.applies_to(project) and (pattern is None or pattern.search(v.title))
    ]


async def execute_verification(verification: Verification, ctx: CheckContext) -> dict:
    ctx.check_title = verification.title
    status = "passed"
    error = ""
    cause = ""
    screenshot = ""
    inventory = {}
    started = time.monotonic()
    try:
        await verification.func(ctx)
    except Exception as e:
        status = "failed"
        error = str(e) or e.__class__.__name__
        current_url = ""
        try:
            current_url = ctx.page.url
        except Exception:
            current_url = ""
        body = ""
        try:
            body = await ctx.body_text()
        except Exception:
            body = ""
        cause = describe_failure(ctx.errors, body)
        try:
            inventory = await build_element_inventory(ctx.page)
        except Exception:
            inventory = {}
        print(f"✖ Test failed: [{ctx.project}] {verification.title} — {error} (url={current_url})")
        try:
            shot = await ctx.screenshot("failure")
            screenshot = str(shot)
        except Exception as shot_err:
            if ctx.verbose:
                print(f"⚠️ Could not save failure screenshot: {shot_err}")
    if not screenshot and ctx.shots:
        screenshot = str(ctx.shots[-1])

    result = {
        "name": verification.title,
        "project": ctx.project,
        "status": status,
        "error": error,
        "cause": cause,
        "screenshot": screenshot,
        "duration_ms": int((time.monotonic() - started) * 1000),
        "diagnostics": {**ctx.errors.summary(), "inventory": inventory} if status == "failed" else ctx.errors.summary(),
    }
    if status == "passed":
        print(f"✓ Passed: [{ctx.project}] {verification.title}")
    else:
        err_excerpt = error if len(error) < 300 else (error[:297] + "...")
        print(f"✖ Failed: [{ctx.project}] {verification.title} — {err_excerpt}")
        if cause:
            print(f"   likely cause: {cause}")
    return result


async def run_project(p, project: Project, verifications: list[Verification], base_url: str, results_dir: Path, launch_options: dict | None = None, settle_ms: int = 2000, verbose: bool = False) -> list[dict]:
    screenshots_dir = results_dir / project.name
    screenshots_dir.mkdir(parents=True, exist_ok=True)
    print(f"🚀 Project {project.name} ({project.browser}, {len(verifications)} verification(s))")

    browser_type = getattr(p, project.browser)
    browser = await browser_type.launch(**(launch_options or browser_launch_options()))
    results = []
    try:
        for verification in verifications:
            context = await browser.new_context(**project.context_options(p.devices))
            page = await context.new_page()
            ctx = CheckContext(
                page=page,
                base_url=base_url,
                project=project.name,
                screenshots_dir=screenshots_dir,
                settle_ms=settle_ms,
                verbose=verbose,
                errors=ErrorCollector().attach(page),
            )
            try:
                results.append(await execute_verification(verification, ctx))
            finally:
                await context.close()
    finally:
        await browser.close()
    return results


async def run_test_suite(base_url: str, plan: list[tuple[Project, list[Verification]]], results_dir: Path, launch_options: dict | None = None, settle_ms: int = 2000, verbose: bool = False) -> dict:
    results = []
    async with async_playwright() as p:
        for project, verifications in plan:
            results.extend(await run_project(
                p,
                project,
                verifications,
                base_url=base_url,
                results_dir=results_dir,
                launch_options=launch_options,
                settle_ms=settle_ms,
                verbose=verbose,
            ))
    return {"tests": results}


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    projects = resolve_projects(parser, args.project)
    try:
        re.compile(args.grep or "")
    except re.error as e:
        parser.error(f"invalid --grep pattern: {e}")

    verifications = all_verifications()
    plan = [(project, select_verifications(verifications, project.name, args.grep)) for project in projects]
    plan = [(project, selected) for project, selected in plan if selected]
    if not plan:
        print("✖ No verifications matched the selected projects" + (f" and --grep {args.grep!r}" if args.grep else ""))
        return ENGINE_NO_TESTS

    verbose = args.verbose or args.debug
    print(f"🏃 Running verifications against {args.base_url}")
    results_json = asyncio.run(run_test_suite(
        base_url=args.base_url,
        plan=plan,
        results_dir=settings.results_dir,
        launch_options=browser_launch_options(headed=args.headed, debug=args.debug),
        settle_ms=settings.screenshot_delay_ms,
        verbose=verbose,
    ))

    results_path = settings.report_dir / "results.json"
    write_results_json(results_json, results_path)
    print(f"📊 Results written: {results_path}")
    if args.reporter == "html":
        write_html_report(results_json, settings.report_path)
        print(f"📝 HTML report: {settings.report_path}")

    total, passed, failed = summarize(results_json)
    print(f"✅ Done. Total: {total}, Passed: {passed}, Failed: {failed}" if not failed else f"✖ Done. Total: {total}, Passed: {passed}, Failed: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
