# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Tests for covprofiler.alignment: depth parsing, merging, readers, headers."""

import shutil
import sys

import pytest

from covprofiler.alignment import get_depth_reader
from covprofiler.alignment.depth import (
    PysamDepthReader,
    SamtoolsDepthReader,
    get_coverage,
    merge_depth,
    parse_depth_lines,
)
from covprofiler.alignment.header import filter_seq_lengths, parse_sq_lines, read_seq_lengths
from covprofiler.core.profiles import build_coverage_profiles
from covprofiler.errors import DepthSourceError

from .data import TINY_BAM_LENGTHS, TINY_BAM_UTR


class FakeReader:
    """Serves canned ``samtools depth`` lines per file name."""

    name = 'fake'

    def __init__(self, depth, lengths=None):
        self.depth = depth
        self.lengths = lengths or {}

    def depth_lines(self, samfile):
        return self.depth[samfile]

    def seq_lengths(self, samfile):
        return dict(self.lengths)


# =========================================================================
# Parsing and merging
# =========================================================================

class TestParseDepthLines:
    def test_triples(self):
        lines = ['tx1\t1\t5\n', 'tx1\t2\t7\n', 'tx2\t10\t0\n']
        assert list(parse_depth_lines(lines)) == [('tx1', 1, 5), ('tx1', 2, 7), ('tx2', 10, 0)]

    def test_blank_lines_skipped(self):
        assert list(parse_depth_lines(['', 'tx1\t1\t5', '\n'])) == [('tx1', 1, 5)]

    def test_wrong_column_count(self):
        with pytest.raises(DepthSourceError, match='expected 3 columns'):
            list(parse_depth_lines(['tx1\t1\t5\t6']))

    def test_non_integer_depth(self):
        with pytest.raises(DepthSourceError, match='sample.bam:2'):
            list(parse_depth_lines(['tx1\t1\t5', 'tx1\t2\tmany'], source='sample.bam'))


class TestMergeDepth:
    def test_sums_repeated_positions(self):
        coverage = merge_depth([('tx1', 1, 2), ('tx1', 1, 3), ('tx2', 4, 1)])
        assert coverage['tx1'][1] == 5
        assert coverage['tx2'][4] == 1

    def test_adds_into_existing(self):
        coverage = merge_depth([('tx1', 1, 2)])
        merge_depth([('tx1', 1, 3), ('tx1', 2, 1)], coverage)
        assert dict(coverage['tx1']) == {1: 5, 2: 1}


class TestGetCoverage:
    def test_sums_across_files(self):
        reader = FakeReader({
            'a.bam': ['tx1\t1\t2', 'tx1\t2\t1'],
            'b.bam': ['tx1\t1\t3', 'tx2\t7\t4'],
        })
        coverage = get_coverage(['a.bam', 'b.bam'], reader)
        assert coverage == {'tx1': {1: 5, 2: 1}, 'tx2': {7: 4}}
        assert type(coverage['tx1']) is dict

    def test_same_file_twice_is_linear(self):
        lines = ['tx1\t%d\t%d' % (pos, pos % 7) for pos in range(1, 601)]
        reader = FakeReader({'a.bam': lines})
        once = get_coverage(['a.bam'], reader)
        twice = get_coverage(['a.bam', 'a.bam'], reader)
        halved = {seq_id: {pos: d // 2 for pos, d in by_pos.items()} for seq_id, by_pos in twice.items()}
        assert halved == once
        lengths = {'tx1': 600}
        assert build_coverage_profiles(halved, lengths, 500) == build_coverage_profiles(once, lengths, 500)


# =========================================================================
# Header lengths
# =========================================================================

class TestHeader:
    def test_parse_sq_lines(self):
        header = [
            '@HD\tVN:1.6\tSO:coordinate\n',
            '@SQ\tSN:tx1\tLN:600\n',
            '@SQ\tLN:800\tSN:tx2\tM5:abc\n',
            '@PG\tID:bwa\n',
        ]
        assert dict(parse_sq_lines(header)) == {'tx1': 600, 'tx2': 800}

    def test_parse_sq_missing_length(self):
        with pytest.raises(DepthSourceError, match='Malformed'):
            list(parse_sq_lines(['@SQ\tSN:tx1']))

    def test_parse_sq_bad_length(self):
        with pytest.raises(DepthSourceError, match='Invalid LN'):
            list(parse_sq_lines(['@SQ\tSN:tx1\tLN:long']))

    def test_filter_seq_lengths(self):
        lengths = {'tx1': 600, 'tx2': 800, 'tx3': 900}
        assert filter_seq_lengths(lengths, {'tx1': {1: 1}, 'tx3': {}}) == {'tx1': 600, 'tx3': 900}

    def test_read_seq_lengths(self, tiny_bam):
        assert read_seq_lengths(tiny_bam) == TINY_BAM_LENGTHS

    def test_read_seq_lengths_missing_file(self, tmp_path):
        with pytest.raises(DepthSourceError):
            read_seq_lengths(str(tmp_path / 'missing.bam'))


# =========================================================================
# Readers
# =========================================================================

class TestGetDepthReader:
    def test_pysam(self):
        assert get_depth_reader('pysam') is PysamDepthReader

    def test_samtools(self):
        assert get_depth_reader('samtools') is SamtoolsDepthReader

    def test_unknown(self):
        with pytest.raises(NotImplementedError):
            get_depth_reader('bedtools')


class TestPysamDepthReader:
    def test_depth(self, tiny_bam):
        coverage = get_coverage([tiny_bam], PysamDepthReader())
        assert coverage == {
            'tx1': {pos: 1 for pos in range(16, 26)},
            'tx2': {pos: 1 for pos in range(29, 39)},
        }

    def test_profiles_from_bam(self, tiny_bam):
        reader = PysamDepthReader()
        coverage = get_coverage([tiny_bam], reader)
        lengths = filter_seq_lengths(reader.seq_lengths(tiny_bam), coverage)
        assert lengths == {'tx1': 30, 'tx2': 40}
        profiles = build_coverage_profiles(coverage, lengths, TINY_BAM_UTR)
        assert profiles.total == 20
        assert profiles.abs_cds == {-4: 1, -3: 1, -2: 1, -1: 2, 0: 2}
        assert profiles.abs_utr == {1: 2, 2: 2, 3: 2, 4: 2, 5: 2, 6: 1, 7: 1, 8: 1}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DepthSourceError):
            PysamDepthReader().depth_lines(str(tmp_path / 'missing.bam'))


class TestSamtoolsDepthReader:
    def test_missing_executable(self, tmp_path):
        reader = SamtoolsDepthReader(str(tmp_path / 'no-samtools'))
        with pytest.raises(DepthSourceError, match='Could not run'):
            reader.depth_lines('sample.bam')

    def test_nonzero_exit(self, tmp_path):
        # the interpreter exits non-zero when asked to run a script "depth" that does not exist
        reader = SamtoolsDepthReader(sys.executable)
        with pytest.raises(DepthSourceError, match='exited with status'):
            reader.depth_lines(str(tmp_path / 'sample.bam'))

    @pytest.mark.skipif(shutil.which('samtools') is None, reason='samtools not on PATH')
    def test_matches_pysam(self, tiny_bam):
        external = SamtoolsDepthReader()
        assert get_coverage([tiny_bam], external) == get_coverage([tiny_bam], PysamDepthReader())
        assert external.seq_lengths(tiny_bam) == TINY_BAM_LENGTHS
