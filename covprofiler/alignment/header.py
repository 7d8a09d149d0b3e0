# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Transcript lengths from alignment file headers (``@SQ`` records)."""

import logging as lg

import pysam

from ..errors import DepthSourceError


def parse_sq_lines(lines):
    """Yield ``(seq_id, length)`` from SAM header text.

    Args:
        lines: Iterable of header lines, e.g. ``samtools view -H`` output.
    """
    for line in lines:
        if not line.startswith('@SQ'):
            continue
        fields = line.rstrip('\n').split('\t')[1:]
        tags = dict(f.split(':', 1) for f in fields if ':' in f)
        if 'SN' not in tags or 'LN' not in tags:
            raise DepthSourceError(f'Malformed @SQ header line: {line.strip()!r}')
        try:
            length = int(tags['LN'])
        except ValueError:
            raise DepthSourceError(f'Invalid LN in @SQ header line: {line.strip()!r}') from None
        yield tags['SN'], length


def read_seq_lengths(samfile):
    """Return ``{seq_id: length}`` for every reference in *samfile*."""
    try:
        with pysam.AlignmentFile(samfile, check_sq=False) as sf:
            return dict(zip(sf.references, sf.lengths))
    except (OSError, ValueError) as exc:
        raise DepthSourceError(f'Could not read header of {samfile}: {exc}') from exc


def filter_seq_lengths(seq_lengths, coverage):
    """Keep only lengths of transcripts that have depth data."""
    _kept = {seq_id: length for seq_id, length in seq_lengths.items() if seq_id in coverage}
    lg.debug(f'Kept {len(_kept)} of {len(seq_lengths)} header lengths')
    return _kept
