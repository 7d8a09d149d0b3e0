# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

import pytest

from .data import write_tiny_bam


@pytest.fixture
def tiny_bam(tmp_path):
    return write_tiny_bam(str(tmp_path / 'tiny.bam'))


@pytest.fixture
def empty_bam(tmp_path):
    """The tiny BAM header with no reads."""
    return write_tiny_bam(str(tmp_path / 'empty.bam'), with_reads=False)
