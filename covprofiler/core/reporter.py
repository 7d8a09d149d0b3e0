# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Profile tables and output files.

Each profile is written as a headerless TSV of ``coordinate`` and percent of
the sample's total depth, sorted by numeric coordinate. The five files of a
sample are written together or not at all.
"""
import logging as lg
import os

import pandas as pd

from ..errors import InputInconsistencyError

# (profile name, output file suffix)
OUTPUT_SUFFIXES = [
    ('rel_cds', 'cds-rel.cov'),
    ('rel_utr', 'utr-rel.cov'),
    ('abs_cds', 'cds-abs.cov'),
    ('abs_utr', 'utr-abs.cov'),
    ('scaled_cds', 'cds-scaled.cov'),
]


def format_profile(profile, total):
    """Percent-of-total table for one profile.

    Args:
        profile: dict {coordinate: depth}
        total: Sum of all depth in the sample (shared by every profile)

    Returns:
        pandas.DataFrame with columns ``position`` and ``percent``, sorted
        ascending by ``position``.
    """
    if total <= 0:
        raise InputInconsistencyError(f'Cannot normalize coverage to a total depth of {total}')
    _df = pd.DataFrame({
        'position': pd.Series(list(profile.keys()), dtype='int64'),
        'depth': pd.Series(list(profile.values()), dtype='float64'),
    })
    _df.sort_values('position', inplace=True, kind='stable')
    _df['percent'] = 100 * _df['depth'] / total
    return _df[['position', 'percent']].reset_index(drop=True)


def output_profile(profile, total, filename):
    """Write one profile table to *filename*."""
    _table = format_profile(profile, total)
    with open(filename, 'w') as outh:
        _table.to_csv(outh, sep='\t', header=False, index=False)


def write_profiles(profiles, paths):
    """Write all five profile files of a sample.

    Tables are rendered first and written to temporary files that are moved
    into place only once every file has been written. Missing parent
    directories are created.

    Args:
        profiles: CoverageProfiles
        paths: dict {profile name: output path}, one entry per profile

    Returns:
        List of written file paths, in output order.
    """
    _tables = [
        (paths[name], format_profile(getattr(profiles, name), profiles.total))
        for name, _ in OUTPUT_SUFFIXES
    ]

    for path, _ in _tables:
        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    _pending = []
    try:
        for path, table in _tables:
            tmp_path = path + '.tmp'
            _pending.append(tmp_path)
            with open(tmp_path, 'w') as outh:
                table.to_csv(outh, sep='\t', header=False, index=False)
    except OSError:
        for tmp_path in _pending:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        raise

    for (path, _), tmp_path in zip(_tables, _pending):
        os.replace(tmp_path, path)
        lg.info(f'Wrote {path}')
    return [path for path, _ in _tables]
