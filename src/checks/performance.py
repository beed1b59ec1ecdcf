import time

from checks import verification
from diagnostics import critical_errors


LOAD_BUDGET_MS = 20000
MAX_CRITICAL_ERRORS = 5

TIMING = """
() => {
  const t = performance.timing;
  return {
    domContentLoaded: t.domContentLoadedEventEnd - t.navigationStart,
    loadComplete: t.loadEventEnd - t.navigationStart,
    domInteractive: t.domInteractive - t.navigationStart,
  };
}
"""


@verification("App loads within the performance budget")
async def load_budget(ctx):
    started = time.monotonic()
    await ctx.open()
    elapsed_ms = int((time.monotonic() - started) * 1000) - ctx.settle_ms
    timing = await ctx.page.evaluate(TIMING)
    ctx.log(f"Load: {elapsed_ms}ms, DOM ready: {timing.get('domContentLoaded')}ms")
    assert elapsed_ms < LOAD_BUDGET_MS, f"Load took {elapsed_ms}ms (budget {LOAD_BUDGET_MS}ms)"

    errors = critical_errors(ctx.errors.console_errors)
    assert len(errors) < MAX_CRITICAL_ERRORS, f"{len(errors)} critical console errors, first: {errors[0]}"
