"""Well-known annotation codes and binary annotation keys.

Core annotations mark the protocol-level lifecycle of a span (client and
server send/receive, wire send/receive and their fragment variants). They
are positional timing events, not user tags, so queries may not be refined
by them.
"""

# Joins the terms of an annotation query
ANNOTATION_QUERY_SEPARATOR = " and "

# Core annotations
CLIENT_SEND = "cs"
CLIENT_RECV = "cr"
SERVER_SEND = "ss"
SERVER_RECV = "sr"
WIRE_SEND = "ws"
WIRE_RECV = "wr"
CLIENT_SEND_FRAGMENT = "csf"
CLIENT_RECV_FRAGMENT = "crf"
SERVER_SEND_FRAGMENT = "ssf"
SERVER_RECV_FRAGMENT = "srf"

# Other annotations users commonly query on
ERROR = "error"
LOCAL_COMPONENT = "lc"
CLIENT_ADDR = "ca"
SERVER_ADDR = "sa"

CORE_ANNOTATIONS: frozenset[str] = frozenset(
    (
        CLIENT_SEND,
        CLIENT_RECV,
        SERVER_SEND,
        SERVER_RECV,
        WIRE_SEND,
        WIRE_RECV,
        CLIENT_SEND_FRAGMENT,
        CLIENT_RECV_FRAGMENT,
        SERVER_SEND_FRAGMENT,
        SERVER_RECV_FRAGMENT,
    )
)


class TraceKeys:
    """Binary annotation keys for HTTP instrumentation."""

    HTTP_HOST = "http.host"
    HTTP_METHOD = "http.method"
    HTTP_PATH = "http.path"
    HTTP_ROUTE = "http.route"
    HTTP_URL = "http.url"
    HTTP_STATUS_CODE = "http.status_code"
    HTTP_REQUEST_SIZE = "http.request.size"
    HTTP_RESPONSE_SIZE = "http.response.size"


def is_core(code: str) -> bool:
    """Returns True if the code is a reserved core annotation."""
    return code in CORE_ANNOTATIONS
