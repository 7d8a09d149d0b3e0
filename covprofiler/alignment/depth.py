# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Per-base depth from alignment files.

Depth is obtained from ``samtools depth``, either in-process through pysam
or by running a ``samtools`` executable. Output of one call per alignment
file is summed into a single map ``{transcript: {position: depth}}``.
"""

import logging as lg
import subprocess
from collections import Counter, defaultdict

import pysam

from ..errors import DepthSourceError
from .header import parse_sq_lines, read_seq_lengths


def parse_depth_lines(lines, source='depth'):
    """Yield ``(seq_id, position, depth)`` from ``samtools depth`` output.

    Args:
        lines: Iterable of tab-separated lines.
        source: Name used in error messages.
    """
    for lineno, line in enumerate(lines, 1):
        line = line.rstrip('\n')
        if not line:
            continue
        fields = line.split('\t')
        if len(fields) != 3:
            raise DepthSourceError(f'{source}:{lineno}: expected 3 columns, found {len(fields)}')
        try:
            pos, depth = int(fields[1]), int(fields[2])
        except ValueError:
            raise DepthSourceError(f'{source}:{lineno}: non-integer position or depth') from None
        yield fields[0], pos, depth


def merge_depth(triples, coverage=None):
    """Add ``(seq_id, position, depth)`` triples into *coverage*.

    Args:
        triples: Iterable of depth observations.
        coverage: defaultdict(Counter) to add into. A new one is created if
            not given.

    Returns:
        The updated *coverage*.
    """
    if coverage is None:
        coverage = defaultdict(Counter)
    for seq_id, pos, depth in triples:
        coverage[seq_id][pos] += depth
    return coverage


class PysamDepthReader:
    """Runs samtools in-process through pysam."""

    name = 'pysam'

    def __init__(self, samtools=None):
        # pysam bundles samtools; an executable path is not needed
        self.samtools = samtools

    def depth_lines(self, samfile):
        try:
            _out = pysam.depth(samfile)
        except (pysam.SamtoolsError, OSError) as exc:
            raise DepthSourceError(f'samtools depth failed on {samfile}: {exc}') from exc
        return _out.splitlines()

    def seq_lengths(self, samfile):
        return read_seq_lengths(samfile)


class SamtoolsDepthReader:
    """Runs an external ``samtools`` executable."""

    name = 'samtools'

    def __init__(self, samtools='samtools'):
        self.samtools = samtools

    def _run(self, *args):
        _cmd = [self.samtools] + list(args)
        lg.debug('Running: {}'.format(' '.join(_cmd)))
        try:
            result = subprocess.run(_cmd, capture_output=True, text=True)
        except OSError as exc:
            raise DepthSourceError(f'Could not run {self.samtools}: {exc}') from exc
        if result.returncode != 0:
            raise DepthSourceError(
                '{} exited with status {}: {}'.format(' '.join(_cmd), result.returncode, result.stderr.strip())
            )
        return result.stdout.splitlines()

    def depth_lines(self, samfile):
        return self._run('depth', samfile)

    def seq_lengths(self, samfile):
        return dict(parse_sq_lines(self._run('view', '-H', samfile)))


def get_coverage(samfiles, reader):
    """Summed depth over all *samfiles*.

    Args:
        samfiles: List of alignment file paths.
        reader: PysamDepthReader or SamtoolsDepthReader instance.

    Returns:
        dict {seq_id: {position: depth}}
    """
    coverage = defaultdict(Counter)
    for samfile in samfiles:
        lg.info(f'Processing {samfile}')
        merge_depth(parse_depth_lines(reader.depth_lines(samfile), source=samfile), coverage)
    return {seq_id: dict(by_pos) for seq_id, by_pos in coverage.items()}
