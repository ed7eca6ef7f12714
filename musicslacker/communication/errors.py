"""User-facing error text for failed link lookups."""

from ..resolver import ResolverError, ResolverErrorKind

RATE_LIMIT_MESSAGE = "_Unable to fetch links due to rate limiting. Please try again in a moment._"
GENERIC_ERROR_MESSAGE = "_Sorry, I encountered an error fetching links for this track._"


def format_error(e: BaseException) -> str:
    """Map a failure to a short sentence safe to post in the channel.

    Dispatches on ResolverError.kind. Raw exception text is never included,
    since it may carry internal URLs or tokens.
    """
    if isinstance(e, ResolverError) and e.kind is ResolverErrorKind.RATE_LIMITED:
        return RATE_LIMIT_MESSAGE
    return GENERIC_ERROR_MESSAGE
