import socket
import threading
from enum import Enum
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import HTTPRedirectHandler, Request, build_opener


class ProbeResult(Enum):
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"
    TIMED_OUT = "timed-out"


class _NoRedirect(HTTPRedirectHandler):
    # A 3xx is an answer; surface it as HTTPError instead of following it
    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def _is_timeout(exc: BaseException | None) -> bool:
    return isinstance(exc, (TimeoutError, socket.timeout))


def _get(url: str, timeout_s: float) -> ProbeResult:
    opener = build_opener(_NoRedirect)
    try:
        request = Request(url=url, method="GET", headers={"User-Agent": "solace-e2e-probe"})
        with opener.open(request, timeout=timeout_s):
            return ProbeResult.REACHABLE
    except HTTPError:
        # Server answered, just not with 2xx
        return ProbeResult.REACHABLE
    except URLError as exc:
        if _is_timeout(exc.reason):
            return ProbeResult.TIMED_OUT
        return ProbeResult.UNREACHABLE
    except (TimeoutError, socket.timeout):
        return ProbeResult.TIMED_OUT
    except (OSError, ValueError, HTTPException):
        return ProbeResult.UNREACHABLE


def probe(url: str, timeout_ms: int) -> ProbeResult:
    """Single GET against the app; any HTTP response at all counts as reachable.

    timeout_ms bounds the whole exchange, not each socket read, so a server
    trickling bytes still comes back TIMED_OUT on time.
    """
    timeout_s = timeout_ms / 1000.0
    outcome: list[ProbeResult] = []
    worker = threading.Thread(target=lambda: outcome.append(_get(url, timeout_s)), daemon=True)
    worker.start()
    worker.join(timeout_s)
    if not outcome:
        return ProbeResult.TIMED_OUT
    return outcome[0]
