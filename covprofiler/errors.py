# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Exceptions reported by CovProfiler.

Every error the command line reports to the user derives from
:class:`CovProfilerError`, so ``main()`` can turn them into a single
``ERROR`` log line and a non-zero exit status.
"""


class CovProfilerError(Exception):
    """Base class for errors reported by CovProfiler."""


class ConfigurationError(CovProfilerError, ValueError):
    """Run parameters that cannot be used (e.g. a negative UTR length)."""


class InputInconsistencyError(CovProfilerError, ValueError):
    """Depth and length data that cannot be transformed together."""


class DepthSourceError(CovProfilerError, RuntimeError):
    """The depth or header reader failed or produced malformed output."""
