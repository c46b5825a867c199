"""Click routing for anchors inside rendered previews.

The host application attaches one delegated click handler to the container
that holds the rendered HTML and forwards clicks on ``<a>`` elements to
`ClickRouter.handle_click`. The router decides between smooth scrolling,
default browser handling, and client-side navigation.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol
from urllib.parse import quote, urljoin, urlsplit

from .config import RenderConfig
from .security import is_absolute_url

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    """Client-side navigation collaborator."""

    def navigate(self, path: str) -> None: ...


class Scroller(Protocol):
    """Scrolls an element into view smoothly; returns False when it is missing."""

    def scroll_into_view(self, element_id: str) -> bool: ...


class History(Protocol):
    """Replaces the URL fragment without reloading the page."""

    def replace_fragment(self, href: str) -> None: ...


class RouteAction(Enum):
    """Outcome of a routed click.

    Attributes:
        IGNORED: The click did not target a usable link.
        SCROLLED: An anchor link was handled by smooth scrolling.
        BROWSER_DEFAULT: The browser handles the click (new tab, absolute URL).
        WIKI_ROUTE: Navigated to a wiki document route.
        INTERNAL_ROUTE: Navigated to an in-app path.
    """

    IGNORED = auto()
    SCROLLED = auto()
    BROWSER_DEFAULT = auto()
    WIKI_ROUTE = auto()
    INTERNAL_ROUTE = auto()


@dataclass
class AnchorClick:
    """A click on a rendered ``<a>`` element.

    Attributes:
        href: Raw ``href`` attribute value.
        target: ``target`` attribute value, if any.
        is_anchor_link: Whether the element carries ``data-anchor-link="true"``.
        default_prevented: Set once the router takes over navigation.
    """

    href: str | None
    target: str | None = None
    is_anchor_link: bool = False
    default_prevented: bool = field(default=False, init=False)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, object]) -> AnchorClick:
        """Build a click from an element's attribute mapping."""
        href = attributes.get("href")
        target = attributes.get("target")
        return cls(
            href=href if isinstance(href, str) else None,
            target=target if isinstance(target, str) else None,
            is_anchor_link=attributes.get("data-anchor-link") == "true",
        )

    def prevent_default(self) -> None:
        self.default_prevented = True


def normalize_wiki_path(href: str) -> str:
    """Resolve ``./`` and ``../`` segments and percent-encode each segment.

    Parent segments that would climb above the wiki root are dropped.

    Examples:
        normalize_wiki_path("./guides/setup.md")  # "guides/setup.md"
        normalize_wiki_path("../a/../b c.md")  # "b%20c.md"
    """
    segments: list[str] = []
    for segment in href.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    return "/".join(quote(segment, safe="!*'()") for segment in segments)


def resolve_against(location: str, href: str) -> str:
    """Resolve `href` against the current location and return the in-app path.

    Examples:
        resolve_against("https://app.test/docs/intro", "setup?tab=2")  # "/docs/setup?tab=2"
    """
    parts = urlsplit(urljoin(location, href))
    path = posixpath.normpath(parts.path) if parts.path else "/"
    if parts.path.endswith("/") and path != "/":
        path += "/"
    if parts.query:
        path += f"?{parts.query}"
    if parts.fragment:
        path += f"#{parts.fragment}"
    return path


class ClickRouter:
    """Route clicks on rendered anchors.

    Args:
        navigator: Client-side navigation collaborator.
        scroller: Smooth-scroll collaborator for anchor links.
        history: URL fragment collaborator for anchor links.
        location: Absolute URL of the current page.
        wiki_route_prefix: Route prefix for wiki documents.
        wiki_extensions: Extensions that mark an href as a wiki document.
    """

    def __init__(
        self,
        navigator: Navigator,
        scroller: Scroller,
        history: History,
        location: str,
        wiki_route_prefix: str = "/wiki/",
        wiki_extensions: tuple[str, ...] = (".md",),
    ):
        self.navigator = navigator
        self.scroller = scroller
        self.history = history
        self.location = location
        self.wiki_route_prefix = wiki_route_prefix
        self.wiki_extensions = tuple(extension.lower() for extension in wiki_extensions)

    @classmethod
    def from_config(
        cls,
        config: RenderConfig,
        navigator: Navigator,
        scroller: Scroller,
        history: History,
        location: str,
    ) -> ClickRouter:
        return cls(
            navigator,
            scroller,
            history,
            location,
            wiki_route_prefix=config.wiki_route_prefix,
            wiki_extensions=config.wiki_extensions,
        )

    def is_wiki_href(self, href: str) -> bool:
        return href.lower().endswith(self.wiki_extensions)

    def handle_click(self, click: AnchorClick) -> RouteAction:
        """Decide how a click on a rendered anchor is handled.

        Checks, in order: smooth-scroll anchor links, links that open in a new
        context, wiki documents, other relative links. Absolute URLs are left
        to the browser.
        """
        href = click.href
        if not href:
            return RouteAction.IGNORED

        if click.is_anchor_link and href.startswith("#"):
            click.prevent_default()
            if self.scroller.scroll_into_view(href[1:]):
                self.history.replace_fragment(href)
            else:
                logger.debug("Anchor target %r not found", href)
            return RouteAction.SCROLLED

        if click.target == "_blank":
            return RouteAction.BROWSER_DEFAULT

        if is_absolute_url(href):
            return RouteAction.BROWSER_DEFAULT

        click.prevent_default()

        if self.is_wiki_href(href):
            path = f"{self.wiki_route_prefix}{normalize_wiki_path(href)}"
            self.navigator.navigate(path)
            return RouteAction.WIKI_ROUTE

        path = href if href.startswith("/") else resolve_against(self.location, href)
        self.navigator.navigate(path)
        return RouteAction.INTERNAL_ROUTE
