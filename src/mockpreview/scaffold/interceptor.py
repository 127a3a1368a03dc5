"""Matching rules of the generated fetch interceptor.

The interceptor itself is JavaScript rendered from
``templates/preview_entry.jsx.j2``; this module states the same rule in
Python so the generator can warn about mocks that will never be served.
"""

from typing import Optional, Sequence
from ..models import NetworkMock

WILDCARD = "*"
MOCK_LATENCY_MS = 500


def match_network_mock(mocks: Sequence[NetworkMock], url: str) -> Optional[NetworkMock]:
    """Pick the mock that answers a request to ``url``.

    First mock whose pattern is ``*`` or a substring of the URL wins. Mocks
    without a string pattern never match. With no match the first mock is
    served anyway; ``None`` (real network) only when there are no mocks at all.
    """
    if not mocks:
        return None
    for mock in mocks:
        if _matches(mock.url_pattern, url):
            return mock
    return mocks[0]


def _matches(pattern, url: str) -> bool:
    return isinstance(pattern, str) and (pattern == WILDCARD or pattern in url)


def shadowed_mocks(mocks: Sequence[NetworkMock]) -> list[NetworkMock]:
    """Mocks that can never be served because an earlier mock always wins.

    A URL containing a later pattern also contains any earlier pattern that
    is a substring of it, so the later mock is unreachable.
    """
    return [
        mock
        for mock in mocks
        if isinstance(mock.url_pattern, str)
        and match_network_mock(mocks, mock.url_pattern) is not mock
    ]
