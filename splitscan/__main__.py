#! /usr/bin/env python
# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

""" Main functionality of Splitscan

"""
import sys
import argparse

from splitscan import __version__
from .cli import scan as cli_scan


USAGE = ''' %(prog)s <command> [<args>]

The most commonly used commands are:
   scan           Extract split-read segments overlapping loci

'''


def main():
    if len(sys.argv) == 1:
        empty_parser = argparse.ArgumentParser(
            description='Segments of split and chimeric reads',
            usage=USAGE,
        )
        empty_parser.print_help(sys.stderr)
        sys.exit(1)

    parser = argparse.ArgumentParser(
        description='Segments of split and chimeric reads',
    )
    parser.add_argument('--version',
        action='version',
        version=__version__,
        default=__version__,
    )

    subparser = parser.add_subparsers(help='Sub-command help', dest='subcommand')

    ''' Parser for scan '''
    scan_parser = subparser.add_parser('scan',
        description='''Extract the aligned segments of reads overlapping loci''',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    cli_scan.ScanOptions.add_arguments(scan_parser)
    scan_parser.set_defaults(func=cli_scan.run)

    args = parser.parse_args()
    args.func(args)

if __name__ == '__main__':
    main()
