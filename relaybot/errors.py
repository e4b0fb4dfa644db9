"""Exception hierarchy for routing, delivery and message validation."""

from __future__ import annotations


class RelayBotError(Exception):
    """Base class for every error raised by relaybot."""


# -- platform / transport --------------------------------------------------


class PlatformError(RelayBotError):
    """A call through the chat-platform client failed."""


class SignatureInvalid(PlatformError):
    """The webhook request signature did not match the channel secret."""


class RequestParseFailed(PlatformError):
    """The webhook body could not be parsed into events."""


class ContentFetchFailed(PlatformError):
    """Binary message content could not be downloaded."""


class ProfileFetchFailed(PlatformError):
    """The user profile lookup failed."""


class DeliveryFailed(PlatformError):
    """A reply or push request was rejected or could not be sent."""


# -- routing ---------------------------------------------------------------


class RoutingError(RelayBotError):
    """An event could not be routed to its handler."""


class UnsupportedJoinSource(RoutingError):
    """Join/leave event from a source kind that cannot be joined."""

    def __init__(self, source_type: str) -> None:
        super().__init__(f"Join/leave event without room or group (source={source_type})")
        self.source_type = source_type


class InvalidUserId(RoutingError):
    """The event source carries no user id."""

    def __init__(self) -> None:
        super().__init__("Invalid user id")


# -- message bank ----------------------------------------------------------


class TooManyMessages(RelayBotError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Can only send {limit} messages at a time")
        self.limit = limit


class NoColumnTemplate(RelayBotError):
    def __init__(self) -> None:
        super().__init__("Column template has not been set up")


# -- builder validation ----------------------------------------------------


class MessageValidationError(RelayBotError):
    """A builder configuration violates a platform limit."""


class MissingMandatoryParameter(MessageValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Missing mandatory parameter: {name}")
        self.name = name


class InvalidUrl(MessageValidationError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL {url!r}: scheme must be https")
        self.url = url


class TextExceedsLimit(MessageValidationError):
    def __init__(self, field: str, limit: int, length: int) -> None:
        super().__init__(f"{field} is {length} characters, limit is {limit}")
        self.field = field
        self.limit = limit
        self.length = length


class TooManyActions(MessageValidationError):
    def __init__(self, limit: int, count: int) -> None:
        super().__init__(f"Too many actions: {count} (limit {limit})")
        self.limit = limit
        self.count = count


class TooManyColumns(MessageValidationError):
    def __init__(self, limit: int, count: int) -> None:
        super().__init__(f"Too many columns: {count} (limit {limit})")
        self.limit = limit
        self.count = count


class ActionCountInconsistent(MessageValidationError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Number of actions is not consistent across columns ({expected} vs {actual})"
        )
        self.expected = expected
        self.actual = actual


class NoAction(MessageValidationError):
    def __init__(self) -> None:
        super().__init__("There is no action for this message")


class InvalidMapSize(MessageValidationError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"Image map width/height must not be 0 (got {width}x{height})")
        self.width = width
        self.height = height
