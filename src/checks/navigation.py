from checks import verification
from diagnostics import ROOT_SELECTORS


INTERACTIVE = 'button, [role="button"], [role="tab"], a'
NAV_SELECTORS = '[role="tablist"], [role="tab"], [role="navigation"], nav, [data-testid*="tab"]'
MAX_TAPS = 3


@verification("Navigation exposes interactive elements")
async def interactive_elements_present(ctx):
    await ctx.open()
    interactive = await ctx.count(INTERACTIVE)
    nav = await ctx.count(NAV_SELECTORS)
    ctx.log(f"Interactive elements: {interactive}, navigation elements: {nav}")
    assert interactive > 0, "No buttons, tabs or links rendered"


@verification("Tapping navigation elements keeps the app alive")
async def tap_navigation(ctx):
    await ctx.open()
    elements = await ctx.page.locator(INTERACTIVE).all()
    tapped = 0
    for element in elements:
        if tapped >= MAX_TAPS:
            break
        try:
            if not await element.is_visible():
                continue
            label = ((await element.text_content()) or "").strip() or (await element.get_attribute("aria-label")) or "element"
            await element.click(timeout=5000)
            await ctx.page.wait_for_timeout(1500)
            await ctx.screenshot(f"after-tap-{label[:30]}")
            tapped += 1
        except Exception as e:
            ctx.log(f"Tap failed: {e}")
            continue

    root = ctx.page.locator(", ".join(ROOT_SELECTORS)).first
    assert await root.count() > 0, "App root disappeared after navigation"
    assert not ctx.errors.page_errors, f"Uncaught error while navigating: {ctx.errors.page_errors[0]}"
    ctx.log(f"Tapped {tapped} element(s)")
