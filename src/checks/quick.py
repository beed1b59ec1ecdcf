from checks import verification
from checks.content import find_terms
from diagnostics import ROOT_SELECTORS, describe_failure


@verification("Quick Validation: app renders on the primary viewport", projects=("comprehensive",))
async def quick_validation(ctx):
    await ctx.open()
    await ctx.screenshot("mobile-initial")
    body = await ctx.body_text()
    roots = await ctx.count(", ".join(ROOT_SELECTORS))
    buttons = await ctx.count('button, [role="button"], [role="tab"]')
    ctx.log(f"Roots: {roots}, interactive: {buttons}, terms: {find_terms(body)}")

    assert roots > 0 and body.strip(), f"App did not render: {describe_failure(ctx.errors, body) or 'no root container'}"
    assert find_terms(body), "No Solace content visible"
