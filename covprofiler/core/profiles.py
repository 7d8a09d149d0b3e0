# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Coverage profile construction.

Transcripts are modelled as a CDS followed by a 3'-UTR of fixed length.
Because transcripts differ in length, per-base depth is re-expressed in
common coordinate systems before it is summed across transcripts:

==============  ===========================================================
profile         coordinate
--------------  -----------------------------------------------------------
``rel_cds``     percent of CDS length, ``-99 .. 0``
``rel_utr``     percent of UTR length, ``1 .. 100``
``abs_cds``     bases from the last CDS base, which is always ``0``
``abs_utr``     1-based offset into the UTR
``scaled_cds``  CDS rescaled to the mean CDS length of all transcripts
==============  ===========================================================

Scaled and percent coordinates round the real quotient up (toward +inf),
so ``ceil(-0.3) == 0`` and ``ceil(-1.2) == -1``.
"""
import logging as lg
from dataclasses import dataclass

import numpy as np

from ..errors import InputInconsistencyError

# Output order of the profiles
PROFILE_NAMES = ('rel_cds', 'rel_utr', 'abs_cds', 'abs_utr', 'scaled_cds')


@dataclass(frozen=True)
class CoverageProfiles:
    """The five aggregated profiles of one sample.

    Profiles are sparse ``{coordinate: depth}`` dicts. ``total`` is the sum
    of every depth observation and is the shared normalization denominator.
    """
    rel_cds: dict                 # {ceil(100 * abs_pos / cds_length): depth}
    rel_utr: dict                 # {ceil(100 * utr_pos / utr_length): depth}
    abs_cds: dict                 # {position - cds_length: depth}
    abs_utr: dict                 # {position - cds_end: depth}
    scaled_cds: dict              # {ceil(mean_cds_length * abs_pos / cds_length): depth}
    total: int
    mean_cds_length: float

    def items(self):
        """Return ``(name, profile)`` pairs in output order."""
        return [(name, getattr(self, name)) for name in PROFILE_NAMES]


def ceil_div(num, den):
    """Exact ceiling of ``num / den`` for integers or integer arrays."""
    return -((-num) // den)


def mean_cds_length(seq_lengths, utr_length):
    """Mean transcript length minus the UTR length.

    Args:
        seq_lengths: dict {transcript: length}
        utr_length: int length of the 3'-UTR

    Returns:
        float
    """
    if not seq_lengths:
        raise InputInconsistencyError('No transcript lengths available')
    lengths = np.fromiter(seq_lengths.values(), dtype=np.float64, count=len(seq_lengths))
    return float(lengths.mean()) - utr_length


def _flatten(coverage, seq_lengths, utr_length):
    """Validate the depth map and flatten it to per-observation arrays.

    Returns:
        (lengths, positions, depths) arrays, one entry per observation.
    """
    _lengths, _positions, _depths = [], [], []
    for seq_id in sorted(coverage):
        by_pos = coverage[seq_id]
        if not by_pos:
            continue
        if seq_id not in seq_lengths:
            raise InputInconsistencyError(
                f'Transcript "{seq_id}" has depth data but no length record'
            )
        length = int(seq_lengths[seq_id])
        if length <= utr_length:
            raise InputInconsistencyError(
                f'Transcript "{seq_id}" has length {length}, which does not '
                f'exceed the 3\'-UTR length {utr_length}'
            )

        pos = np.fromiter(by_pos.keys(), dtype=np.int64, count=len(by_pos))
        dep = np.asarray(list(by_pos.values()))
        if pos.min() < 1 or pos.max() > length:
            raise InputInconsistencyError(
                f'Transcript "{seq_id}" has depth outside positions 1-{length}'
            )
        if (dep < 0).any():
            raise InputInconsistencyError(f'Transcript "{seq_id}" has negative depth values')

        _lengths.append(np.full(len(pos), length, dtype=np.int64))
        _positions.append(pos)
        _depths.append(dep)

    if not _positions:
        empty = np.zeros(0, dtype=np.int64)
        return empty, empty, empty
    return np.concatenate(_lengths), np.concatenate(_positions), np.concatenate(_depths)


def _accumulate(coords, depths):
    """Sum depths sharing a coordinate. Returns {coordinate: depth}."""
    if len(coords) == 0:
        return {}
    keys, inverse = np.unique(coords, return_inverse=True)
    sums = np.zeros(len(keys), dtype=depths.dtype)
    np.add.at(sums, inverse, depths)
    return dict(zip(keys.tolist(), sums.tolist()))


def build_coverage_profiles(coverage, seq_lengths, utr_length):
    """Build the five coverage profiles of one sample.

    Args:
        coverage: dict {transcript: {1-based position: depth}}
        seq_lengths: dict {transcript: length}. Every length must exceed
            ``utr_length``. The mean CDS length is taken over all entries.
        utr_length: int length of the 3'-UTR following each CDS

    Returns:
        CoverageProfiles

    Raises:
        InputInconsistencyError: a transcript with depth has no length, a
            length that does not exceed ``utr_length``, or depth outside
            its positions.
    """
    lengths, positions, depths = _flatten(coverage, seq_lengths, utr_length)
    _mean_cds = mean_cds_length(seq_lengths, utr_length)
    total = depths.sum().item() if len(depths) else 0

    # cds_length and cds_end are the same value: the last CDS base
    cds_end = lengths - utr_length
    in_cds = positions <= cds_end

    cds_length = cds_end[in_cds]
    abs_pos = positions[in_cds] - cds_length
    rel_pos = ceil_div(100 * abs_pos, cds_length)
    scaled_pos = np.ceil(_mean_cds * abs_pos / cds_length).astype(np.int64)
    cds_depth = depths[in_cds]

    utr_pos = positions[~in_cds] - cds_end[~in_cds]
    utr_depth = depths[~in_cds]
    # utr_pos is empty whenever utr_length is 0
    rel_utr_pos = ceil_div(100 * utr_pos, utr_length) if len(utr_pos) else utr_pos

    lg.debug(
        f'{len(positions)} observations: {int(in_cds.sum())} CDS, {len(utr_pos)} UTR '
        f'(mean CDS length {_mean_cds:.2f})'
    )

    return CoverageProfiles(
        rel_cds=_accumulate(rel_pos, cds_depth),
        rel_utr=_accumulate(rel_utr_pos, utr_depth),
        abs_cds=_accumulate(abs_pos, cds_depth),
        abs_utr=_accumulate(utr_pos, utr_depth),
        scaled_cds=_accumulate(scaled_pos, cds_depth),
        total=total,
        mean_cds_length=_mean_cds,
    )
