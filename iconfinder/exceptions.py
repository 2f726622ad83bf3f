"""iconfinder specific exceptions."""


class IconFinderError(Exception):
    """Base class for iconfinder errors."""


class ProbeError(IconFinderError):
    """Raised inside the prober when a source cannot produce a usable icon.

    Never escapes the prober; it is converted to a soft failure at its boundary.
    """

    pass


class BridgeUnavailableError(IconFinderError):
    """Raised by a bridge port when the privileged side cannot be reached."""

    pass


class InvalidBridgeRequestError(IconFinderError):
    """Raised for bridge messages that don't match any known request type."""

    pass
