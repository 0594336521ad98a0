"""Exceptions raised by the OWHL processing functions"""


class OWHLError(Exception):
    """Base class for OWHL processing errors"""


class BurstLengthError(OWHLError, ValueError):
    """A continuous series was given without a usable burst length"""


class LatitudeError(OWHLError, ValueError):
    """Depth conversion was requested without a latitude"""


class TimeSeriesTooShortError(OWHLError, ValueError):
    """The only available burst is shorter than the requested burst length"""
