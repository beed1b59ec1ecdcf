from checks import verification


# Substrings marking a request as backend traffic
BACKEND_URL_MARKERS = ("api", "fetch")


def is_backend_request(url: str) -> bool:
    return any(marker in url for marker in BACKEND_URL_MARKERS)


@verification("App still renders when backend requests fail")
async def backend_outage(ctx):
    aborted = []

    async def handle(route):
        url = route.request.url
        if is_backend_request(url):
            aborted.append(url)
            await route.abort()
        else:
            await route.continue_()

    await ctx.page.route("**/*", handle)
    await ctx.open(wait_until="load")
    await ctx.page.wait_for_timeout(3000)
    ctx.log(f"Aborted {len(aborted)} backend request(s)")
    body = (await ctx.body_text()).strip()
    assert body, "Page body is empty once backend requests are blocked"
