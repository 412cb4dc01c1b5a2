"""Pytest configuration shared across test modules."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest
import requests

os.environ.setdefault("SEO_LOG_LEVEL", "DEBUG")

GOOD_TITLE = "Acme Widgets - Durable Tools for Every Worker"
GOOD_DESCRIPTION = (
    "Acme builds durable hand tools and widgets for workshops, "
    "job sites and home garages since 1952."
)


def make_response(
    html: str = "", status_code: int = 200, url: str = "https://example.com/"
) -> requests.Response:
    """Build a real ``requests.Response`` without touching the network."""

    resp = requests.Response()
    resp.status_code = status_code
    resp._content = html.encode("utf-8")
    resp.encoding = "utf-8"
    resp.url = url
    resp.reason = "OK" if 200 <= status_code < 300 else "Error"
    return resp


def fake_session(response: requests.Response | None = None, error: Exception | None = None):
    session = MagicMock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


@pytest.fixture
def clean_page_html() -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>{GOOD_TITLE}</title>
  <meta name="description" content="{GOOD_DESCRIPTION}">
  <meta property="og:title" content="Acme Widgets">
  <script type="application/ld+json">{{"@type": "Organization"}}</script>
</head>
<body>
  <h1>Acme Widgets</h1>
  <h2>Hammers</h2>
  <img src="/hammer.png" alt="Claw hammer">
  <a href="/catalog">Catalog</a>
  <a href="https://partner.example.org/">Partner</a>
  <p>Tools built to last.</p>
</body>
</html>"""


@pytest.fixture
def broken_page_html() -> str:
    return "<html><body><p>Hello</p><img src='a.png'></body></html>"
