# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

"""Progress output on stdout.

The Console prints what a user running ``covprofiler profile`` wants to see:
the inputs, one line per pipeline stage, the files written and a table of
where the time went. Diagnostics go through logging instead.
"""

import sys
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter


@dataclass
class Stage:
    name: str
    count: int = None             # items produced by the stage, if counted
    elapsed: float = 0.0


class StageTimer:
    """Wall time and item counts of consecutive pipeline stages."""

    def __init__(self):
        self.stages = []
        self._began = perf_counter()

    @contextmanager
    def stage(self, name):
        """Time the enclosed block as stage *name*.

        Yields the Stage record; the block may set its ``count``.
        """
        record = Stage(name)
        began = perf_counter()
        try:
            yield record
        finally:
            record.elapsed = perf_counter() - began
            self.stages.append(record)

    @property
    def total(self):
        return perf_counter() - self._began


class Console:
    QUIET, NORMAL, VERBOSE, DEBUG = range(4)

    def __init__(self, level=NORMAL, stream=None):
        self.level = level
        self.stream = stream or sys.stdout

    def _emit(self, text='', min_level=NORMAL):
        if self.level >= min_level:
            print(text, file=self.stream)

    def banner(self, version):
        self._emit()
        self._emit(f"CovProfiler v{version} -- CDS / 3'-UTR coverage profiles")
        self._emit()

    def heading(self, title):
        self._emit(f'  {title}')

    def field(self, label, value):
        self._emit('    {:<14}{}'.format(label + ':', value))

    def message(self, text, indent=2):
        self._emit(' ' * indent + text)

    def verbose(self, text):
        self._emit(f'    {text}', self.VERBOSE)

    def blank(self):
        self._emit()

    def stage_table(self, timer):
        """One row per stage: item count, wall time and share of the run."""
        if not timer.stages:
            return
        total = timer.total
        self.heading('Stages')
        self._emit('    {:<10}{:>12}{:>10}{:>7}'.format('stage', 'count', 'time', 'share'))
        for st in timer.stages:
            count = '-' if st.count is None else f'{st.count:,}'
            share = f'{100 * st.elapsed / total:.0f}%' if total > 0 else ''
            self._emit(f'    {st.name:<10}{count:>12}{st.elapsed:>9.2f}s{share:>7}')
        self._emit('    ' + '-' * 39)
        self._emit('    {:<10}{:>12}{:>9.2f}s'.format('Total', '', total))
