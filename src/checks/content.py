from checks import APP_NAME, verification


MENTAL_HEALTH_TERMS = (
    APP_NAME,
    "Mental Health",
    "Therapy",
    "Mood",
    "Wellness",
    "Dashboard",
    "Welcome",
    "Chat",
    "Assessment",
    "Profile",
)
MIN_TERMS = 2

ERROR_STATES = (
    "Failed to load",
    "Something went wrong",
    "Network error",
    "Unable to connect",
)


def find_terms(text: str, terms=MENTAL_HEALTH_TERMS) -> list[str]:
    lowered = text.lower()
    return [t for t in terms if t.lower() in lowered]


@verification("Mental health content is present")
async def mental_health_content(ctx):
    await ctx.open()
    body = await ctx.body_text()
    found = find_terms(body)
    ctx.log(f"Found terms: {', '.join(found) or 'none'}")
    await ctx.screenshot("content")
    assert len(found) >= MIN_TERMS, f"Only found {found} of the expected app content"

    shown = [s for s in ERROR_STATES if s in body]
    assert not shown, f"App is showing an error state: {shown[0]}"
