import html
import json
import os
import re
from pathlib import Path


def sanitize_for_filename(text: str) -> str:
    """Sanitize text for use in filenames."""
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[-\s]+', '_', text)
    return text.strip('_').lower()[:100]


def summarize(results_json: dict) -> tuple[int, int, int]:
    tests = results_json.get("tests", [])
    passed = sum(1 for r in tests if r.get("status") == "passed")
    failed = sum(1 for r in tests if r.get("status") == "failed")
    return len(tests), passed, failed


def write_results_json(results_json: dict, json_path: Path) -> None:
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(results_json, f, indent=2)


def write_html_report(results_json: dict, html_path: Path):
    total, passed, failed = summarize(results_json)
    projects = sorted({r.get("project", "") for r in results_json.get("tests", [])})
    rendered = ''.join(render_test_result(tr, html_path.parent) for tr in results_json.get('tests', []))

    page = f"""
<html><head><title>Solace UI Verification Report</title>
<style>
body {{ font-family: Arial, sans-serif; padding: 20px; }}
.summary {{ margin-bottom: 16px; }}
.pass {{ color: #0a7b44; }}
.fail {{ color: #b00020; }}
.project {{ color: #555; font-size: 0.9em; }}
pre {{ background: #f6f8fa; padding: 12px; border-radius: 6px; overflow: auto; }}
</style>
</head><body>
  <h1>Solace UI Verification Report</h1>
  <div class="summary">
    <strong>Total:</strong> {total} &nbsp; <strong class="pass">Passed:</strong> {passed} &nbsp; <strong class="fail">Failed:</strong> {failed}
    <br /><strong>Projects:</strong> {html.escape(', '.join(projects))}
  </div>
  <hr />
  {rendered}
</body></html>
"""
    html_path.parent.mkdir(parents=True, exist_ok=True)
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(page)


def render_test_result(test_result: dict, report_dir: Path | None = None) -> str:
    status_class = "pass" if test_result.get("status") == "passed" else "fail"
    name = html.escape(test_result.get("name", "Unnamed Test"))
    project = html.escape(test_result.get("project", ""))
    error = test_result.get("error", "")
    cause = test_result.get("cause", "")
    screenshot = test_result.get("screenshot", "")
    duration = test_result.get("duration_ms")
    diagnostics_rendered = html.escape(json.dumps(test_result.get("diagnostics", {}), indent=2))
    if screenshot and report_dir is not None:
        # Report lives in its own directory; link screenshots relative to it
        screenshot = os.path.relpath(screenshot, report_dir)
    img_tag = f"<div><img src=\"{html.escape(screenshot)}\" style=\"max-width: 100%; border: 1px solid #ddd;\" /></div>" if screenshot else ""
    error_block = f"<pre>{html.escape(error)}</pre>" if error else ""
    cause_block = f"<p><strong>Likely cause:</strong> {html.escape(cause)}</p>" if cause else ""
    timing = f" ({duration} ms)" if duration is not None else ""
    return f"""
  <section>
    <h3 class="{status_class}">{name} — {test_result.get('status','unknown').upper()}{timing}</h3>
    <div class="project">{project}</div>
    <details>
      <summary>Diagnostics</summary>
      <pre>{diagnostics_rendered}</pre>
    </details>
    {img_tag}
    {error_block}
    {cause_block}
  </section>
  <hr />
"""
