"""
Tracing header relay.

The mesh sidecar generates ``x-request-id`` on ingress; the application only
has to copy it from the inbound request onto the outbound call so the proxy
can stitch both spans into one trace. The value is never generated here.
"""
from typing import Dict, Mapping, Optional

REQUEST_ID_HEADER = "x-request-id"


def request_id(headers: Mapping[str, str]) -> Optional[str]:
    return headers.get(REQUEST_ID_HEADER)


def outbound_headers(inbound: Mapping[str, str]) -> Dict[str, str]:
    """Headers to attach to a downstream call made on behalf of ``inbound``.

    An absent header stays absent; an empty value is relayed as-is.
    """
    rid = request_id(inbound)
    if rid is None:
        return {}
    return {REQUEST_ID_HEADER: rid}
