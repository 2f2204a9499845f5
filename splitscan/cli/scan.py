# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

""" Splitscan scan

"""
import asyncio
import logging as lg
import os
import sys
from time import time

from . import SubcommandOptions, configure_logging
from .console import Stopwatch
from ..alignment import AbortedByCaller
from ..alignment.scanner import ScannerOptions, scan_segments
from ..alignment.segment import Locus
from ..alignment.source import PysamRecordSource
from ..core import reporter
from ..grouping.groups import group_segments, link_groups, summarize_reads
from ..utils.helpers import format_minutes as fmtmins
from ..utils.helpers import merge_overlapping_regions


class ScanOptions(SubcommandOptions):

    OPTS = """
    - Input Options:
        - samfile:
            positional: True
            help: Path to a coordinate-sorted alignment file (BAM or CRAM).
                  An index is created if missing.
        - loci:
            positional: True
            nargs: "+"
            type: locus
            help: One or more loci to scan, e.g. chr1:1000000-1005000.
        - merge_loci:
            action: store_true
            help: Merge overlapping or adjacent loci before scanning.
    - Scan Options:
        - max_reads:
            type: int
            default: 2000
            help: Maximum number of alignment records to examine per locus.
                  0 scans every record.
        - include_singletons:
            action: store_true
            help: Keep reads with a single aligned segment in the groups and
                  reads reports.
        - slop:
            type: int
            default: 0
            help: Segments within this many bases of each other are grouped
                  together.
        - batch_size:
            type: int
            default: 1000
            help: Number of records fetched per batch.
        - ncpu:
            type: int
            default: 1
            help: Number of decompression threads used by htslib.
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
            default: .
            help: Output directory.
        - exp_tag:
            default: splitscan
            help: Experiment tag
    """

    def __init__(self, args):
        super().__init__(args)
        if self.logfile is None:
            self.logfile = sys.stderr

    def outfile_path(self, suffix):
        basename = '%s-%s' % (self.exp_tag, suffix)
        return os.path.join(self.outdir, basename)

    def scan_loci(self):
        """Loci in command-line order, or sorted and merged with ``--merge_loci``."""
        if not self.merge_loci:
            return list(self.loci)
        regions = [(loc.chrom, loc.start, loc.end) for loc in self.loci]
        return [Locus(*r) for r in merge_overlapping_regions(regions)]

    def scanner_options(self, progress=None):
        return ScannerOptions(
            max_reads=self.max_reads,
            include_singletons=self.include_singletons,
            progress=progress,
        )


def run(args):
    opts = ScanOptions(args)
    console = configure_logging(opts)
    lg.info('\n{}\n'.format(opts))
    total_time = time()
    stopwatch = Stopwatch()

    console.banner(opts.version)
    console.section('Input')
    console.item('Alignment', os.path.basename(opts.samfile))
    loci = opts.scan_loci()
    console.item('Loci', ', '.join(str(loc) for loc in loci))
    console.blank()

    def _progress(n, chrom_and_pos=None):
        if chrom_and_pos is not None and n % 10000 == 0:
            lg.info('...examined {:,} records, at {}:{:,}'.format(n, *chrom_and_pos))
        return False

    stopwatch.start('Scan')
    with PysamRecordSource(opts.samfile, batch_size=opts.batch_size, threads=opts.ncpu) as source:
        try:
            segments = asyncio.run(scan_segments(source, loci, opts.scanner_options(_progress)))
        except AbortedByCaller as exc:
            lg.error(str(exc))
            console.status('Scan aborted.')
            sys.exit(1)
    console.status('Scanning alignments... done ({:.1f}s)'.format(time() - total_time))
    console.detail('{:,} segments from {:,} reads'.format(
        len(segments), len({s.readid for s in segments})))

    stopwatch.start('Group')
    groups = group_segments(segments, include_singletons=opts.include_singletons, slop=opts.slop)
    links = link_groups(groups)
    summaries = summarize_reads([s for g in groups for s in g.segments])
    console.detail('{:,} groups in {:,} linked sets'.format(len(groups), len(links)))
    for g in groups:
        console.verbose('{}: {:,} segments, {:,} reads'.format(g.grp, len(g.segments), len(g.readids)))
    console.blank()

    stopwatch.start('Report')
    os.makedirs(opts.outdir, exist_ok=True)
    run_info = {
        'version': opts.version,
        'loci': len(loci),
        'segments': len(segments),
        'groups': len(groups),
    }
    _outputs = [
        opts.outfile_path('segments.tsv'),
        opts.outfile_path('groups.tsv'),
        opts.outfile_path('reads.tsv'),
    ]
    reporter.write_segments(segments, _outputs[0], run_info)
    reporter.write_groups(groups, links, _outputs[1])
    reporter.write_reads(summaries, _outputs[2])
    stopwatch.stop()

    console.section('Output')
    for path in _outputs:
        console.detail(path)
    console.blank()
    console.timing_table(stopwatch)
    console.status('Completed in {:.1f}s'.format(time() - total_time))
    lg.info("splitscan scan complete (%s)" % fmtmins(time() - total_time))
