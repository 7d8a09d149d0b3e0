# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

""" CovProfiler profile

"""
import sys
import os
import logging as lg

from . import SubcommandOptions, configure_logging
from .console import StageTimer
from ..alignment import get_depth_reader
from ..alignment.depth import get_coverage
from ..alignment.header import filter_seq_lengths
from ..core.profiles import build_coverage_profiles
from ..core.reporter import OUTPUT_SUFFIXES, write_profiles
from ..errors import ConfigurationError
from ..utils.helpers import count_observations
from ..utils.helpers import format_minutes as fmtmins


class ProfileOptions(SubcommandOptions):

    OPTS = """
    - Input Options:
        - bamfiles:
            positional: True
            nargs: "+"
            help: Alignment files (BAM/SAM) against the transcript reference.
                  Depth is summed over all files; transcript lengths are read
                  from the header of the first file.
        - depth_reader:
            default: pysam
            choices:
                - pysam
                - samtools
            help: How per-base depth is obtained. "pysam" runs samtools depth
                  in-process; "samtools" runs the executable given by
                  --samtools.
        - samtools:
            default: samtools
            help: samtools executable used by --depth_reader samtools.
    - Profile Options:
        - id:
            aliases: ['-i']
            required: True
            help: Sample ID. Used as the prefix of every output file.
        - length_3_UTR:
            aliases: ['-l']
            type: int
            default: 500
            help: Length of 3'-UTR following the CDS in the reference.
    - Reporting Options:
        - quiet:
            action: store_true
            help: Silence (most) output.
        - verbose:
            action: store_true
            help: Show detailed progress and timing.
        - debug:
            action: store_true
            help: Print debug messages.
        - logfile:
            type: argparse.FileType('w')
            help: Log output to this file.
        - outdir:
            aliases: ['--out_dir', '-o']
            default: .
            help: Output directory.
    """

    def __init__(self, args):
        super().__init__(args)
        if self.logfile is None:
            self.logfile = sys.stderr
        if self.length_3_UTR < 0:
            raise ConfigurationError(
                f"3'-UTR length must not be negative (got {self.length_3_UTR})"
            )
        if not self.id.strip():
            raise ConfigurationError('Sample ID must not be empty')

    def outfile_path(self, suffix):
        """ ``<outdir>/<id>.<suffix>`` """
        return os.path.join(self.outdir, f'{self.id}.{suffix}')

    def output_paths(self):
        return {name: self.outfile_path(suffix) for name, suffix in OUTPUT_SUFFIXES}


def run(args):
    """Depth -> lengths -> profiles -> five output files.

    Args:
        args: Parsed argparse namespace.

    Returns:
        CoverageProfiles of the sample.
    """
    opts = ProfileOptions(args)
    console = configure_logging(opts)
    lg.info('\n{}\n'.format(opts))
    timer = StageTimer()

    reader = get_depth_reader(opts.depth_reader)(opts.samtools)

    console.banner(opts.version)
    console.heading('Input')
    console.field('Sample', opts.id)
    for samfile in opts.bamfiles:
        console.field('BAM', os.path.basename(samfile))
    console.field("3'-UTR", '{:,} bp'.format(opts.length_3_UTR))
    console.field('Depth', reader.name)
    console.blank()

    with timer.stage('Depth') as stage:
        coverage = get_coverage(opts.bamfiles, reader)
        stage.count = count_observations(coverage)
    lg.info('Loaded depth in {}'.format(fmtmins(stage.elapsed)))
    console.message('Loaded depth ({:.1f}s): {:,} covered positions on {:,} transcripts'.format(
        stage.elapsed, stage.count, len(coverage)))

    with timer.stage('Lengths') as stage:
        seq_lengths = filter_seq_lengths(reader.seq_lengths(opts.bamfiles[0]), coverage)
        stage.count = len(seq_lengths)
    console.verbose('Transcript lengths from {}'.format(os.path.basename(opts.bamfiles[0])))

    with timer.stage('Profiles') as stage:
        profiles = build_coverage_profiles(coverage, seq_lengths, opts.length_3_UTR)
        stage.count = sum(len(profile) for _, profile in profiles.items())
    console.message('Total depth {:,}, mean CDS length {:,.1f} bp'.format(
        profiles.total, profiles.mean_cds_length))
    console.blank()

    with timer.stage('Output') as stage:
        paths = write_profiles(profiles, opts.output_paths())
        stage.count = len(paths)

    console.heading('Output')
    for path in paths:
        console.message(path, indent=4)
    console.blank()
    console.stage_table(timer)
    console.blank()
    console.message('Completed in {:.1f}s'.format(timer.total))
    console.blank()
    lg.info('covprofiler profile complete (%s)' % fmtmins(timer.total))
    return profiles
