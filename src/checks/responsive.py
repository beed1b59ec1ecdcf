from checks import verification


VIEWPORTS = (
    ("mobile", 375, 812),
    ("tablet", 768, 1024),
    ("desktop", 1280, 720),
)
MIN_SCREENSHOT_BYTES = 1000


@verification("Layout renders across viewport sizes", projects=("comprehensive", "mobile-desktop"))
async def responsive_layout(ctx):
    await ctx.open()
    for label, width, height in VIEWPORTS:
        await ctx.page.set_viewport_size({"width": width, "height": height})
        await ctx.page.wait_for_timeout(1000)
        shot = await ctx.screenshot(f"{label}-{width}x{height}")
        size = shot.stat().st_size
        assert size > MIN_SCREENSHOT_BYTES, f"{label} screenshot is only {size} bytes"


ORIENTATIONS = (
    ("portrait", 375, 667),
    ("landscape", 667, 375),
)


@verification("Content survives portrait and landscape orientation")
async def orientation(ctx):
    await ctx.open()
    for label, width, height in ORIENTATIONS:
        await ctx.page.set_viewport_size({"width": width, "height": height})
        await ctx.page.wait_for_timeout(1000)
        body = (await ctx.body_text()).strip()
        ctx.log(f"{label} {width}x{height}: {len(body)} characters of text")
        assert body, f"Page body is empty in {label} orientation"
