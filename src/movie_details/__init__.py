"""Movie Details.

Aggregates the detail page of a single movie from independent remote
sources (metadata, cast, similar titles, rating status and reviews) into
one incrementally built view state, and hosts the rating submission
workflow on top of it.
"""

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "0.1.0-dev"
