# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.


def format_minutes(seconds):
    mins = seconds // 60
    secs = seconds - (mins * 60)
    return '%d minutes and %d secs' % (mins, secs)


def count_observations(coverage):
    """Number of (transcript, position) pairs in a depth map."""
    return sum(len(by_pos) for by_pos in coverage.values())
