from checks import APP_NAME, verification
from diagnostics import ROOT_SELECTORS, extract_issues


@verification("App loads and renders the root container")
async def app_renders_root(ctx):
    response = await ctx.open()
    assert response is None or response.status < 400, f"App answered HTTP {response.status}"

    root = ctx.page.locator(", ".join(ROOT_SELECTORS)).first
    await root.wait_for(state="attached", timeout=15000)
    await ctx.screenshot("initial-load")

    body = await ctx.body_text()
    assert body.strip(), "Page body is blank after load"

    issues = extract_issues(body, *ctx.errors.page_errors)
    assert not issues, f"Bundle did not load cleanly: {'; '.join(issues)}"
    ctx.log(f"Body text length: {len(body)}")


@verification("Page has app title and mobile viewport meta")
async def title_and_viewport_meta(ctx):
    await ctx.open(wait_until="domcontentloaded")
    title = await ctx.page.title()
    assert APP_NAME in title, f"Title '{title}' does not mention {APP_NAME}"

    viewport = await ctx.page.get_attribute('meta[name="viewport"]', "content") or ""
    assert "width=device-width" in viewport, f"Viewport meta is '{viewport}'"
