"""htmx content negotiation.

htmx adds ``HX-Request: true`` to every request it issues. That header is
the only signal used to choose between a fragment and a full page.
"""

from collections.abc import Mapping

from starlette.datastructures import Headers

HX_REQUEST_HEADER = "HX-Request"
HX_REQUEST_VALUE = "true"
HX_TRIGGER_HEADER = "HX-Trigger"
HX_RETARGET_HEADER = "HX-Retarget"
HX_RESWAP_HEADER = "HX-Reswap"


def is_htmx_request(headers: Mapping[str, str]) -> bool:
    """Check whether a request came from htmx (progressive enhancement mode).

    The header name is matched case-insensitively, the value must be exactly
    "true". Absence or any other value means standard navigation.
    """
    if isinstance(headers, Headers):
        value = headers.get(HX_REQUEST_HEADER)
    else:
        wanted = HX_REQUEST_HEADER.lower()
        value = next((v for k, v in headers.items() if k.lower() == wanted), None)
    return value == HX_REQUEST_VALUE
