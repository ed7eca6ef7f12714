"""Link pipeline — one message in, one reply (or nothing) out.

    text -> detect -> resolve -> search fallbacks -> compose

Stateless: nothing survives between calls, so concurrent messages need no
locking. The resolver is passed in rather than created here.
"""

import logging
from typing import Optional

from .communication.errors import format_error
from .communication.formatting import compose
from .detector import classify, detect
from .models import MusicService
from .resolver import ResolverError, SonglinkClient
from .search import generate_search_urls

logger = logging.getLogger("musicslacker.pipeline")


class LinkPipeline:
    """Builds the "Also stream this on" reply for a chat message."""

    def __init__(self, resolver: SonglinkClient, include_missing: bool = True):
        self.resolver = resolver
        self.include_missing = include_missing

    async def build_reply(self, text: str) -> Optional[str]:
        """Return the reply for ``text``, or None if it has no music link.

        Raises:
            ResolverError: song.link failed or rate limited us
        """
        link = detect(text)
        if link is None:
            return None

        # Re-identify from the extracted URL alone
        service = classify(link.url)
        if service is MusicService.UNKNOWN:
            logger.debug(f"Detected URL matched no service: {link.url}")
            return None

        logger.info(f"Resolving {service.display_name} link: {link.url}")
        result = await self.resolver.resolve(link.url)
        fallback = generate_search_urls(result.metadata)

        return compose(result.links, fallback, service, include_missing=self.include_missing)

    async def process(self, text: str) -> Optional[str]:
        """Like build_reply(), but resolver failures become an error reply."""
        try:
            return await self.build_reply(text)
        except ResolverError as e:
            logger.warning(f"Link lookup failed ({e.kind.value}): {e}")
            return format_error(e)
