import re

from bs4 import BeautifulSoup

from app.schemas.profile import BusinessProfile, ContactInfo, SocialMedia
from app.schemas.website import PageMetadata, SocialLinks

MAX_TEXT_LENGTH = 5000

_URL_TAIL = r"""[^\s"'<>]+"""

_LINKEDIN_RE = re.compile(rf"https?://(?:www\.)?linkedin\.com/(?:company|in)/({_URL_TAIL})", re.I)
_TWITTER_RE = re.compile(rf"https?://(?:www\.)?twitter\.com/({_URL_TAIL})", re.I)
_FACEBOOK_RE = re.compile(rf"https?://(?:www\.)?facebook\.com/({_URL_TAIL})", re.I)
_INSTAGRAM_RE = re.compile(rf"https?://(?:www\.)?instagram\.com/({_URL_TAIL})", re.I)
_YOUTUBE_HANDLE_RE = re.compile(r"""https?://(?:www\.)?youtube\.com/@([^\s"'<>/]+)""", re.I)
_YOUTUBE_LEGACY_RE = re.compile(
    rf"https?://(?:www\.)?youtube\.com/(?:channel|c|user)/({_URL_TAIL})", re.I
)

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")

# Optional +1, then 3-3-4 digits with "-", "." or whitespace separators
_PHONE_RE = re.compile(r"(?:\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")

_WHITESPACE_RE = re.compile(r"\s+")


def _first_group(pattern: re.Pattern, html: str) -> str | None:
    m = pattern.search(html)
    return m.group(1) if m else None


def _prefixed(prefix: str, handle: str | None) -> str | None:
    return f"{prefix}{handle}" if handle else None


def _extract_youtube(html: str) -> str | None:
    """Handle form wins; legacy channel/c/user forms are the fallback."""
    handle = _first_group(_YOUTUBE_HANDLE_RE, html)
    if handle:
        return f"https://youtube.com/@{handle}"
    legacy = _first_group(_YOUTUBE_LEGACY_RE, html)
    if legacy:
        path = legacy if "/" in legacy else f"channel/{legacy}"
        return f"https://youtube.com/{path}"
    return None


def _extract_social_links(html: str) -> SocialLinks:
    return SocialLinks(
        linkedin=_prefixed("https://linkedin.com/company/", _first_group(_LINKEDIN_RE, html)),
        twitter=_prefixed("https://twitter.com/", _first_group(_TWITTER_RE, html)),
        facebook=_prefixed("https://facebook.com/", _first_group(_FACEBOOK_RE, html)),
        instagram=_prefixed("https://instagram.com/", _first_group(_INSTAGRAM_RE, html)),
        youtube=_extract_youtube(html),
    )


def _extract_email(html: str) -> str | None:
    m = _EMAIL_RE.search(html)
    return m.group(0) if m else None


def _extract_phone(html: str) -> str | None:
    m = _PHONE_RE.search(html)
    if not m:
        return None
    return f"+1-{m.group(1)}-{m.group(2)}-{m.group(3)}"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _extract_title(soup: BeautifulSoup) -> str | None:
    tag = soup.find("title")
    return _clean(tag.get_text()) if tag else None


def _extract_description(soup: BeautifulSoup) -> str | None:
    tag = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    if tag is None:
        return None
    content = tag.get("content")
    return _clean(content) if isinstance(content, str) else None


def _extract_text(soup: BeautifulSoup) -> str:
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = _WHITESPACE_RE.sub(" ", soup.get_text(separator=" "))
    return text.strip()[:MAX_TEXT_LENGTH].strip()


def extract_metadata(html: str) -> PageMetadata:
    """Pattern-match page metadata out of raw markup.

    Every lookup runs independently over the full document and a missing
    value is ``None`` rather than an error. Social links, email and phone are
    matched against the raw markup so URLs inside attributes are found.
    """
    soup = BeautifulSoup(html, "html.parser")
    title = _extract_title(soup)
    description = _extract_description(soup)
    text = _extract_text(soup)

    return PageMetadata(
        title=title,
        description=description,
        text=text,
        social_links=_extract_social_links(html),
        email=_extract_email(html),
        phone=_extract_phone(html),
    )


def to_business_profile(metadata: PageMetadata, url: str) -> BusinessProfile:
    """Map heuristic page metadata onto the canonical profile record."""
    links = metadata.social_links
    return BusinessProfile(
        name=metadata.title,
        description=metadata.description,
        website=url,
        contact=ContactInfo(email=metadata.email, phone=metadata.phone),
        social_media=SocialMedia(**links.model_dump()),
    )
