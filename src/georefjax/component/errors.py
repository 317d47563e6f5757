"""Exceptions raised inside the georeferencing core.

They never escape a public :class:`~georefjax.component.GeoreferenceComponent`
operation: the component catches them, logs a warning and keeps its last
good state.  Code that drives the lower-level pieces (the origin tracker,
the pipeline helpers) directly sees them raised.
"""

from __future__ import annotations


class GeoreferenceError(Exception):
    """Base class for georeferencing failures."""


class MissingDependencyError(GeoreferenceError):
    """A collaborator the operation needs is not available.

    Raised when no geodetic service is bound, the component is not
    attached to an engine host, or the origin tracker has not been
    initialized.
    """


class DegenerateGeometryError(GeoreferenceError):
    """The local East-North-Up frame is ill-defined at the location.

    Raised for orientation-preserving moves that start or end within the
    configured pole tolerance of the Earth's rotation axis.
    """
