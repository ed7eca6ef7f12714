"""Reply composition — merge link sets and render the Slack reply text.

Slack mrkdwn links are written ``<url|label>``. Services are rendered in
CANONICAL_ORDER; the service the user shared from is never listed.
"""

from typing import Mapping, Optional

from ..models import CANONICAL_ORDER, MergedLinks, MusicService

NO_LINKS_MESSAGE = "Could not find this track on other streaming services."
LINKS_PREFIX = "Also stream this on: "
MISSING_PREFIX = "Could not find this on: "


def merge_links(
    resolver_links: Mapping[MusicService, Optional[str]],
    fallback_links: Mapping[MusicService, Optional[str]],
) -> MergedLinks:
    """Resolver links win; fallbacks only fill services the resolver left empty.

    The originating service stays in the result. Excluding it is a rendering
    decision made by compose().
    """
    merged: MergedLinks = {}
    for service in CANONICAL_ORDER:
        merged[service] = resolver_links.get(service) or fallback_links.get(service) or None
    return merged


def format_links_message(
    links: Mapping[MusicService, Optional[str]],
    originating_service: MusicService,
    include_missing: bool = True,
) -> str:
    """Render merged links as a single reply. Never returns an empty string."""
    available: list[tuple[MusicService, str]] = []
    missing: list[MusicService] = []
    for service in CANONICAL_ORDER:
        if service == originating_service:
            continue
        url = links.get(service)
        if url:
            available.append((service, url))
        else:
            missing.append(service)

    if not available:
        return NO_LINKS_MESSAGE

    parts = [f"<{url}|{service.display_name}>" for service, url in available]
    message = LINKS_PREFIX + " | ".join(parts)

    if include_missing and missing:
        names = ", ".join(s.display_name for s in missing)
        message += f"\n\n_{MISSING_PREFIX}{names}_"

    return message


def compose(
    resolver_links: Mapping[MusicService, Optional[str]],
    fallback_links: Mapping[MusicService, Optional[str]],
    originating_service: MusicService,
    include_missing: bool = True,
) -> str:
    """Merge, then render. Same input always yields the same text."""
    merged = merge_links(resolver_links, fallback_links)
    return format_links_message(merged, originating_service, include_missing=include_missing)
