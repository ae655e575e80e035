"""ASGI response sending: translates Response objects to ASGI messages."""

from static_simple._internal.asgi import Send
from static_simple.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a Response into ASGI ``send()`` calls.

    A ``Content-Length`` already on the response is kept (HEAD responses
    carry the length of the body they omit); otherwise it is computed.
    For *head* requests the body is never sent.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    if response.header("Content-Length") is None:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    elif not _body_allowed(response.status):
        raw_headers = [(k, b"0" if k == b"content-length" else v) for k, v in raw_headers]

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
