"""Cookie header parsing.

Dynamic include-path providers commonly pick a root from per-user
state; the parsed cookies on ``Request`` are the cheapest source of it.
"""


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers. Pairs without
    ``=`` are skipped.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies[key.strip()] = value.strip()
    return cookies
