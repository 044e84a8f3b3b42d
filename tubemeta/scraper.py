"""HTTP scraping base shared by providers, and text parsing helpers."""

from __future__ import annotations

import random
import re
from datetime import date, datetime
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Mapping
from urllib.parse import urlparse

import lxml.html
import requests

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.3 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:123.0) Gecko/20100101 Firefox/123.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14.3; rv:123.0) Gecko/20100101 Firefox/123.0",
)


def random_user_agent() -> str:
    """Return a browser user agent picked at random."""
    return random.choice(_USER_AGENTS)


def _checked_id(value: Any, kind: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{kind} id must be a string, not {type(value).__name__}")
    return value


class Scraper:
    """Basic provider backed by a requests session."""

    def __init__(
        self,
        name: str,
        base_url: str,
        priority: int,
        *,
        headers: Mapping[str, str] | None = None,
        user_agent: str | None = None,
        cookies: Mapping[str, str] | None = None,
        timeout: float | None = None,
        follow_redirects: bool = True,
        verify: bool = True,
        use_cookies: bool = True,
    ) -> None:
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"invalid base url: {base_url!r}")
        self._name = name
        self._priority = priority
        self._base_url = base_url
        self.timeout = timeout
        self.follow_redirects = follow_redirects

        self.session = requests.Session()
        self.session.verify = verify
        if headers:
            self.session.headers.update(headers)
        if user_agent:
            self.session.headers["User-Agent"] = user_agent
        if use_cookies:
            for key, value in (cookies or {}).items():
                self.session.cookies.set(key, value, domain=parsed.hostname, path="/")
        else:
            self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))

    @property
    def name(self) -> str:
        return self._name

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def url(self) -> str:
        return self._base_url

    def normalize_movie_id(self, movie_id: str) -> str:
        """Return the movie id as is; it must be a string."""
        return _checked_id(movie_id, "movie")

    def normalize_actor_id(self, actor_id: str) -> str:
        """Return the actor id as is; it must be a string."""
        return _checked_id(actor_id, "actor")

    def set_request_timeout(self, timeout: float | None) -> None:
        """Set the timeout, in seconds, for HTTP requests."""
        self.timeout = timeout

    def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> requests.Response:
        """Send a request; error statuses raise unless redirects are disabled."""
        response = self.session.request(
            method,
            url,
            data=data,
            headers=dict(headers) if headers else None,
            timeout=self.timeout,
            allow_redirects=self.follow_redirects,
        )
        if self.follow_redirects:
            response.raise_for_status()
        return response

    def fetch_tree(
        self,
        url: str,
        *,
        method: str = "GET",
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> lxml.html.HtmlElement:
        """Fetch a page and parse it as HTML, keeping its final URL as base."""
        response = self.fetch(url, method=method, data=data, headers=headers)
        content = response.content
        if not content.strip():
            content = b"<html></html>"
        return lxml.html.fromstring(content, base_url=response.url)

    def exists(self, url: str) -> bool:
        """Return True if a HEAD request to the URL succeeds."""
        try:
            response = self.session.head(
                url, timeout=self.timeout, allow_redirects=self.follow_redirects
            )
        except requests.RequestException:
            return False
        return response.ok


def new_default_scraper(name: str, base_url: str, priority: int, **kwargs: Any) -> Scraper:
    """Create a scraper with a random browser user agent unless one is given."""
    kwargs.setdefault("user_agent", random_user_agent())
    return Scraper(name, base_url, priority, **kwargs)


_DATE_RE = re.compile(r"(\d{4})\s*[-/.年]\s*(\d{1,2})\s*[-/.月]\s*(\d{1,2})")
_COMPACT_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y", "%d %b %Y", "%d %B %Y")


def parse_date(text: str) -> date | None:
    """Parse a date written in common numeric or English forms."""
    text = (text or "").strip()
    if not text:
        return None
    match = _DATE_RE.search(text) or _COMPACT_DATE_RE.match(text)
    if match:
        try:
            return date(*(int(part) for part in match.groups()))
        except ValueError:
            return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_runtime(text: str) -> int:
    """Parse a running time into whole minutes; 0 when none is found."""
    text = (text or "").strip()
    if match := re.search(r"(\d+):(\d{1,2}):(\d{1,2})", text):
        hours, minutes, _ = (int(part) for part in match.groups())
        return hours * 60 + minutes
    if match := re.search(r"(\d+)\s*時間\s*(\d+)\s*分", text):
        hours, minutes = (int(part) for part in match.groups())
        return hours * 60 + minutes
    if match := re.search(r"\d+", text):
        return int(match.group())
    return 0


def parse_score(text: str) -> float:
    """Parse the first number in the text as a score; 0.0 when none."""
    if match := re.search(r"\d+(?:\.\d+)?", text or ""):
        return float(match.group())
    return 0.0


def parse_int(text: str) -> int:
    """Parse the first integer in the text; 0 when none."""
    if match := re.search(r"-?\d+", (text or "").strip()):
        return int(match.group())
    return 0


def parse_texts(node: Any) -> list[str]:
    """Collect the non-empty stripped text pieces under an element."""
    if node is None:
        return []
    return [piece.strip() for piece in node.itertext() if piece.strip()]


def replace_space_all(text: str) -> str:
    """Remove every whitespace character from the text."""
    return re.sub(r"\s+", "", text)


def parse_id_to_number(movie_id: str) -> str:
    """Derive a movie number from a provider id."""
    return movie_id.strip().upper()


_SPECIAL_PATTERNS = (
    re.compile(r"^\d[\d_-]*$"),
    re.compile(
        r"^(?:heyzo|fc2(?:[-_]?ppv)?|kin8|xxx[-_]av|mywife|pcolle|carib(?:bean)?"
        r"|1pondo|10musume|pacopacomama|muramura|tokyo[-_]?hot)[-_ ]?.+$",
        re.IGNORECASE,
    ),
    re.compile(r"^(?:n|k|kb|red|sky|ex|cz)\d{3,5}$", re.IGNORECASE),
)


def is_special_number(keyword: str) -> bool:
    """Return True for numbers of sites that do not use studio codes."""
    keyword = keyword.strip()
    return any(pattern.match(keyword) for pattern in _SPECIAL_PATTERNS)