from checks import verification


MIN_NAMED_BUTTON_RATIO = 0.5

COUNT_ACCESSIBLE = """
() => {
  let count = 0;
  for (const el of document.querySelectorAll('*')) {
    if (el.hasAttribute('aria-label') || el.hasAttribute('aria-labelledby') ||
        el.hasAttribute('role') || el.hasAttribute('alt') || el.hasAttribute('title')) {
      count++;
    }
  }
  return count;
}
"""

BUTTON_NAMES = """
() => Array.from(document.querySelectorAll('button, [role="button"]')).map(el =>
  (el.getAttribute('aria-label') || el.innerText || el.textContent || '').trim())
"""


@verification("Elements carry accessibility attributes")
async def accessibility_attributes(ctx):
    await ctx.open()
    count = await ctx.page.evaluate(COUNT_ACCESSIBLE)
    ctx.log(f"Elements with accessibility attributes: {count}")
    assert count > 0, "No element exposes aria-label, role, alt or title"


@verification("Buttons have accessible names")
async def buttons_named(ctx):
    await ctx.open()
    names = await ctx.page.evaluate(BUTTON_NAMES)
    if not names:
        ctx.log("No buttons rendered; nothing to check")
        return
    named = sum(1 for n in names if n)
    ratio = named / len(names)
    ctx.log(f"Named buttons: {named}/{len(names)}")
    assert ratio >= MIN_NAMED_BUTTON_RATIO, f"Only {named} of {len(names)} buttons have an accessible name"


MIN_TOUCH_TARGET_PX = 44
MIN_TOUCH_TARGET_RATIO = 0.5
TAB_PRESSES = 5

TOUCH_TARGET_SIZES = """
() => Array.from(document.querySelectorAll('button, a, [role="button"]')).map(el => {
  const rect = el.getBoundingClientRect();
  return [rect.width, rect.height];
})
"""

FOCUSED_ELEMENT = """
() => {
  const active = document.activeElement;
  if (!active || active === document.body) return null;
  return [active.tagName, active.id, active.getAttribute('role') || '', active.getAttribute('aria-label') || ''].join('|');
}
"""


@verification("Touch targets are at least 44px", projects=("comprehensive", "mobile-ios", "mobile-android"))
async def touch_targets(ctx):
    await ctx.open()
    sizes = await ctx.page.evaluate(TOUCH_TARGET_SIZES)
    if not sizes:
        ctx.log("No interactive elements rendered; nothing to measure")
        return
    big_enough = sum(1 for width, height in sizes if width >= MIN_TOUCH_TARGET_PX and height >= MIN_TOUCH_TARGET_PX)
    ctx.log(f"Touch targets of {MIN_TOUCH_TARGET_PX}px or more: {big_enough}/{len(sizes)}")
    assert big_enough / len(sizes) >= MIN_TOUCH_TARGET_RATIO, (
        f"Only {big_enough} of {len(sizes)} interactive elements are {MIN_TOUCH_TARGET_PX}px or larger"
    )


@verification("Tab key moves focus through the page")
async def keyboard_focus(ctx):
    await ctx.open()
    focused = []
    for i in range(TAB_PRESSES):
        await ctx.page.keyboard.press("Tab")
        await ctx.page.wait_for_timeout(300)
        element = await ctx.page.evaluate(FOCUSED_ELEMENT)
        ctx.log(f"Tab {i + 1}: {element or 'body'}")
        if element and element not in focused:
            focused.append(element)
    assert focused, f"Focus never left the page body after {TAB_PRESSES} Tab presses"
