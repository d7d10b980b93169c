"""Exception and warning types raised by the model engine."""


class ComposeVisError(Exception):
    """Base class for all ComposeVis errors."""


class ConfigurationError(ComposeVisError, ValueError):
    """Inputs that do not fit together.

    Mismatched coordinate arrays, malformed design matrices, or a numerical
    Fourier cache queried at frequencies it was not built for.
    """


class DomainError(ComposeVisError, ValueError):
    """Model parameters that describe a degenerate or impossible model."""


class NumericalWarning(UserWarning):
    """A numerical approximation drifted beyond its expected tolerance."""
