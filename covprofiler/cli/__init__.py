# This file is part of CovProfiler.
# Original coverage-profiler code by Mike Covington
#
# Licensed under MIT License.

import argparse
import logging
from collections import OrderedDict

import yaml

from .console import Console

# Types an option may name in its YAML declaration
_ARG_TYPES = {
    'int': int,
    'str': str,
    "argparse.FileType('w')": argparse.FileType('w'),
}

# YAML keys that are not argparse keywords
_LAYOUT_KEYS = ('positional', 'aliases')

_LOG_FORMAT = '%(asctime)s %(levelname)-8s %(message)s'
_DEBUG_FORMAT = '%(asctime)s %(levelname)-8s %(message)-60s (%(funcName)s in %(filename)s:%(lineno)d)'


def load_option_groups(opts_yaml):
    """Read option groups declared in YAML.

    The document is a list of single-key mappings ``{group title: options}``,
    where each option is a single-key mapping ``{dest: keywords}``.

    Returns:
        OrderedDict {group title: OrderedDict {dest: keywords}}
    """
    groups = OrderedDict()
    for entry in yaml.safe_load(opts_yaml):
        (title, options), = entry.items()
        groups[title] = OrderedDict(list(opt.items())[0] for opt in options)
    return groups


def option_flags(dest, spec):
    """Positional name, or ``--dest`` followed by any declared aliases."""
    if spec.get('positional', False):
        return [dest]
    return [f'--{dest}'] + list(spec.get('aliases', []))


def option_keywords(dest, spec):
    kwargs = {k: v for k, v in spec.items() if k not in _LAYOUT_KEYS}
    if 'type' in kwargs:
        try:
            kwargs['type'] = _ARG_TYPES[kwargs['type']]
        except KeyError:
            raise ValueError(
                f"Option '{dest}' declares unsupported type '{kwargs['type']}'"
            ) from None
    return kwargs


class SubcommandOptions:
    """Parsed options of one subcommand.

    Subclasses declare their options as YAML groups in ``OPTS``; every parsed
    value becomes an attribute of the instance.
    """
    OPTS = None

    def __init__(self, args):
        self.opt_groups = load_option_groups(self.OPTS)
        self.__dict__.update(vars(args))

    @classmethod
    def add_arguments(cls, parser):
        for title, options in load_option_groups(cls.OPTS).items():
            group = parser.add_argument_group(title)
            for dest, spec in options.items():
                group.add_argument(*option_flags(dest, spec), **option_keywords(dest, spec))

    def __str__(self):
        lines = []
        for title, options in self.opt_groups.items():
            lines.append(title)
            for dest in options:
                value = getattr(self, dest, 'Not set')
                # open files print as their path
                value = getattr(value, 'name', value)
                lines.append('    {:30}{}'.format(dest + ':', value))
        return '\n'.join(lines)


def configure_logging(opts):
    """Send logging to ``opts.logfile`` and build the stdout Console.

    ``--debug`` and ``--verbose`` raise both the log level and the Console
    level; ``--quiet`` silences the Console only.
    """
    if opts.debug:
        loglev, logfmt, console_level = logging.DEBUG, _DEBUG_FORMAT, Console.DEBUG
    elif opts.verbose:
        loglev, logfmt, console_level = logging.INFO, _LOG_FORMAT, Console.VERBOSE
    else:
        loglev, logfmt, console_level = logging.WARNING, _LOG_FORMAT, Console.NORMAL
    if opts.quiet:
        console_level = Console.QUIET

    logging.basicConfig(level=loglev, format=logfmt, datefmt='%Y-%m-%d %H:%M:%S',
                        stream=opts.logfile, force=True)
    return Console(level=console_level)
