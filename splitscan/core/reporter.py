# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Tabular reports of scanned segments, groups and reads.

Functions take plain lists of records so they can be used outside the CLI.
"""

import pandas as pd

from ..alignment.segment import SEGMENT_FIELDS, segment_id
from ..utils.helpers import humanize

GROUP_COLUMNS = ['grp', 'chrom', 'grp_min', 'grp_max', 'grp_width', 'width', 'num_segments', 'num_reads', 'link']
READ_COLUMNS = ['readid', 'strand', 'query_start', 'query_end', 'length', 'num_segments', 'mapped']


def segments_frame(segments):
    """One row per segment, with its identity in the ``id`` column."""
    _rows = [[segment_id(s)] + [getattr(s, f) for f in SEGMENT_FIELDS] for s in segments]
    return pd.DataFrame(_rows, columns=['id'] + list(SEGMENT_FIELDS))


def groups_frame(groups, links=None):
    """One row per group. ``links`` is the output of ``link_groups``."""
    _link_of = {}
    for i, names in enumerate(links or []):
        for name in names:
            _link_of[name] = i
    _rows = [
        [g.grp, g.chrom, g.grp_min, g.grp_max, g.grp_width, humanize(g.grp_width),
         len(g.segments), len(g.readids), _link_of.get(g.grp, -1)]
        for g in groups
    ]
    return pd.DataFrame(_rows, columns=GROUP_COLUMNS)


def reads_frame(summaries):
    _rows = [
        [r.readid, r.strand, r.query_start, r.query_end, r.length, r.num_segments,
         ','.join(str(loc) for loc in r.mapped)]
        for r in summaries
    ]
    _df = pd.DataFrame(_rows, columns=READ_COLUMNS)
    _df.sort_values(['num_segments', 'readid'], ascending=[False, True], inplace=True)
    return _df


def _write(df, filename, run_info=None):
    with open(filename, 'w') as outh:
        if run_info:
            _comment = ['## RunInfo']
            _comment += ['{}:{}'.format(*tup) for tup in run_info.items()]
            outh.write('\t'.join(_comment) + '\n')
        df.to_csv(outh, sep='\t', index=False)


def write_segments(segments, filename, run_info=None):
    _write(segments_frame(segments), filename, run_info)


def write_groups(groups, links, filename):
    _write(groups_frame(groups, links), filename)


def write_reads(summaries, filename):
    _write(reads_frame(summaries), filename)
