""" Exceptions raised while estimating demand and yield. """
# clean


class EstimationError(Exception):

    """Base class of all HiDEM errors."""


class InvalidInput(EstimationError, ValueError):

    """The request lacks the data a calculation needs. The only error callers see."""


class ExternalDataError(EstimationError):

    """An external data provider could not deliver a series."""


class NetworkError(ExternalDataError):

    """The provider could not be reached or answered with a server error."""


class ParseError(ExternalDataError):

    """The provider answered, but the payload was malformed or incomplete."""


class NotFound(ExternalDataError):

    """The provider has no data for the requested coordinate."""
