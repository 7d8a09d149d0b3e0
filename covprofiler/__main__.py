#! /usr/bin/env python
# -*- coding: utf-8 -*-

# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

""" covprofiler command line

"""
import sys
import argparse
import logging as lg

from covprofiler import __version__
from .cli import profile as cli_profile
from .errors import CovProfilerError


def build_parser():
    parser = argparse.ArgumentParser(
        prog='covprofiler',
        description="Coverage profiles across CDS and 3'-UTR of transcripts",
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.set_defaults(version=__version__)

    commands = parser.add_subparsers(title='commands', dest='subcommand', metavar='<command>')
    profile_parser = commands.add_parser('profile',
        help="Build CDS and 3'-UTR coverage profiles from alignments",
        description="Build CDS and 3'-UTR coverage profiles from alignments",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_profile.ProfileOptions.add_arguments(profile_parser)
    profile_parser.set_defaults(func=cli_profile.run)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if getattr(args, 'func', None) is None:
        parser.print_help(sys.stderr)
        sys.exit(1)

    try:
        args.func(args)
    except CovProfilerError as exc:
        lg.error(str(exc))
        sys.exit(1)


if __name__ == '__main__':
    main()
