# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

__version__ = '0.1.0'
