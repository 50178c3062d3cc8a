"""
Pytest configuration and shared fixtures for dataapi tests.
"""

import pytest
from requests import PreparedRequest

from dataapi.auth import Authenticator
from dataapi.http import HttpTransport
from dataapi.service import Service

HOGE_NS = "http://example.com/schemas#hoge"

ENTRY_XML = b"""<?xml version='1.0' encoding='UTF-8'?>
<entry xmlns="http://www.w3.org/2005/Atom" xmlns:gd="http://schemas.google.com/g/2005"
       xmlns:hoge="http://example.com/schemas#hoge" gd:etag='"BxAaTxRZAyp7ImBq"'>
  <id>http://example.com/myentry/1</id>
  <updated>2010-01-01T00:00:00.000Z</updated>
  <title type="text">hello</title>
  <content type="text">world</content>
  <hoge:name kind="nick">foo</hoge:name>
  <link rel="edit" type="application/atom+xml" href="http://example.com/myentry/1/edit"/>
  <link rel="self" type="application/atom+xml" href="http://example.com/myentry/1"/>
</entry>
"""

FEED_XML = b"""<?xml version='1.0' encoding='UTF-8'?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:gd="http://schemas.google.com/g/2005"
      gd:etag='W/"CUMBRHo_fip7ImA9WxRbGU0."'>
  <id>http://example.com/myentry</id>
  <updated>2010-01-01T00:00:00.000Z</updated>
  <title type="text">my entries</title>
  <link rel="http://schemas.google.com/g/2005#post" type="application/atom+xml" href="http://example.com/myentry"/>
  <link rel="self" type="application/atom+xml" href="http://example.com/myentry?max-results=2"/>
  <link rel="next" type="application/atom+xml" href="http://example.com/myentry?start-index=3&amp;max-results=2"/>
  <entry gd:etag='"AAA"'>
    <id>http://example.com/myentry/1</id>
    <title type="text">first</title>
    <link rel="edit" type="application/atom+xml" href="http://example.com/myentry/1/edit"/>
  </entry>
  <entry gd:etag='"BBB"'>
    <id>http://example.com/myentry/2</id>
    <title type="text">second</title>
    <link rel="edit" type="application/atom+xml" href="http://example.com/myentry/2/edit"/>
  </entry>
</feed>
"""


class StaticAuthenticator(Authenticator):
    """Signs every request with a fixed token and records what it signed."""

    scheme = "static"

    def __init__(self, token: str = "test-token"):
        self.token = token
        self.signed = []
        self.authenticate_calls = 0

    @property
    def is_authenticated(self) -> bool:
        return True

    def authenticate(self) -> None:
        self.authenticate_calls += 1

    def sign_request(self, request: PreparedRequest) -> PreparedRequest:
        request.headers["Authorization"] = f"Static {self.token}"
        self.signed.append(request)
        return request


@pytest.fixture
def authenticator():
    return StaticAuthenticator()


@pytest.fixture
def transport():
    with HttpTransport(timeout=5, user_agent="MyService") as transport:
        yield transport


@pytest.fixture
def service(authenticator, transport):
    return Service(authenticator, namespaces={"hoge": HOGE_NS}, transport=transport)


@pytest.fixture
def clean_environment(monkeypatch, tmp_path):
    """Remove dataapi environment variables and any stray .env file."""
    for name in (
        "DATAAPI_USERNAME",
        "DATAAPI_PASSWORD",
        "DATAAPI_CONSUMER_KEY",
        "DATAAPI_CONSUMER_SECRET",
        "DATAAPI_ACCESS_TOKEN",
        "DATAAPI_ACCESS_TOKEN_SECRET",
        "DATAAPI_TIMEOUT",
        "DATAAPI_LOG_LEVEL",
        "DATAAPI_DEBUG",
        "GOOGLE_DATAAPI_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def entry_xml():
    return ENTRY_XML


@pytest.fixture
def feed_xml():
    return FEED_XML
