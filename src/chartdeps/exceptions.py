"""chartdeps exception hierarchy.

All public exceptions inherit from ChartDepsError, giving callers a single
base class to catch when they want to handle any chartdeps-specific failure
without swallowing unrelated errors.
"""


class ChartDepsError(Exception):
    """Base exception for all chartdeps errors."""


class ChartLoadError(ChartDepsError):
    """Raised when a chart cannot be loaded.

    Covers a missing or unreadable ``Chart.yaml``, invalid YAML, missing
    required metadata fields, and corrupt chart archives. A load failure
    aborts the whole listing operation: no partial report is produced.
    """


class AnnotationError(ChartDepsError):
    """Raised when the shared-dependency annotation is malformed.

    The annotation must be a YAML list of mappings, each naming a
    dependency. Any other shape is reported rather than coerced into a
    guessed structure.
    """


class VersionError(ChartDepsError, ValueError):
    """Raised when a version or version constraint cannot be parsed.

    Inherits from ``ValueError`` so that callers treating parse failures
    as plain value errors keep working.
    """


class PatternError(ChartDepsError):
    """Raised when an archive search pattern cannot be built or evaluated.

    The status classifier turns this into the ``bad pattern`` status for
    the affected dependency and carries on with the rest.
    """
