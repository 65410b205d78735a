"""Reading and writing the experiment cookie."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from urllib.parse import quote_plus, unquote_plus

MAX_COOKIE_LENGTH = 4096

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class CookieValueTooLongError(ValueError):
    """The serialised cookie would exceed the size browsers accept."""

    def __init__(self, message: str = "cookie value too long") -> None:
        super().__init__(message)


def unique(values) -> bool:
    """True when no value occurs twice."""
    items = list(values)
    return len(items) == len(set(items))


@dataclass(frozen=True)
class Cookie:
    name: str
    value: str
    path: str = ""
    max_age: int = 0
    http_only: bool = False
    secure: bool = False
    same_site: str | None = None

    def header_value(self) -> str:
        """The cookie serialised for a Set-Cookie header."""
        value = f'"{self.value}"' if " " in self.value or "," in self.value else self.value
        parts = [f"{self.name}={value}"]
        if self.path:
            parts.append(f"Path={self.path}")
        if self.max_age:
            parts.append(f"Max-Age={max(self.max_age, 0)}")
        if self.http_only:
            parts.append("HttpOnly")
        if self.secure:
            parts.append("Secure")
        if self.same_site:
            parts.append(f"SameSite={self.same_site}")
        return "; ".join(parts)


def write_cookie(headers: list, cookie: Cookie) -> str:
    """Escape the value, append a Set-Cookie header and return its value."""
    header = replace(cookie, value=quote_plus(cookie.value)).header_value()
    if len(header.encode("utf-8")) > MAX_COOKIE_LENGTH:
        raise CookieValueTooLongError()
    headers.append(("Set-Cookie", header))
    return header


def read_cookie(cookie_header: str | None, name: str) -> Cookie | None:
    """Find cookie ``name`` in a Cookie header, or None; bad escapes raise ValueError."""
    for part in (cookie_header or "").split(";"):
        cookie_name, _, raw = part.strip().partition("=")
        cookie_name = cookie_name.strip()
        if cookie_name != name or not _TOKEN_RE.match(cookie_name):
            continue
        if len(raw) > 1 and raw[0] == raw[-1] == '"':
            raw = raw[1:-1]
        if not all(0x20 <= ord(ch) < 0x7F and ch not in '";\\' for ch in raw):
            continue
        match = _BAD_ESCAPE_RE.search(raw)
        if match:
            raise ValueError(f"invalid URL escape {raw[match.start():match.start() + 3]!r}")
        return Cookie(name=cookie_name, value=unquote_plus(raw))
    return None