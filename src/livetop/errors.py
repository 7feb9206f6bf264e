"""Exceptions raised by livetop."""


class LivetopError(Exception):
    """Base class for livetop errors."""


class TerminalInitError(LivetopError):
    """The terminal could not be put under the dashboard's control."""


class MetricsError(LivetopError):
    """The metrics provider could not be initialized."""


class DrawError(LivetopError):
    """A frame could not be written to the terminal."""


class InputError(LivetopError):
    """An input event could not be read."""
