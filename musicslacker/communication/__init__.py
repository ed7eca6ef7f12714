"""Communication sub-core — what goes back to Slack and how.

- Formatting: merge link sets, render the "Also stream this on" reply
- Errors: user-facing sentences for failed lookups
- Slack: signature checks, event envelopes, Web API calls
"""

from .errors import format_error
from .formatting import compose, format_links_message, merge_links
from .slack import SlackAPIError, SlackClient, parse_message_event, verify_slack_signature

__all__ = [
    # Formatting
    "compose",
    "format_links_message",
    "merge_links",
    # Errors
    "format_error",
    # Slack
    "SlackAPIError",
    "SlackClient",
    "parse_message_event",
    "verify_slack_signature",
]
