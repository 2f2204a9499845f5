# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Grouping of scanned segments.

Segments whose reference spans overlap are clustered into groups (reference
windows). Groups that share a read are then linked, which recovers the sets
of windows joined by split reads.
"""

import logging as lg
from collections import OrderedDict, defaultdict
from dataclasses import dataclass, field

from intervaltree import IntervalTree

from ..alignment.segment import Locus, segment_id
from .unionfind import UnionFind


@dataclass
class SegmentGroup:
    """Overlapping segments on one reference sequence."""
    grp: str
    chrom: str
    grp_min: int
    grp_max: int
    segments: list = field(default_factory=list)

    @property
    def grp_width(self):
        return self.grp_max - self.grp_min + 1

    @property
    def readids(self):
        return {s.readid for s in self.segments}


@dataclass(frozen=True)
class ReadSummary:
    """Where a read's segments fall, in read order."""
    readid: str
    strand: str                   # strand of the first segment in read order
    query_start: int
    query_end: int
    num_segments: int
    mapped: tuple                 # Locus per segment, in read order

    @property
    def length(self):
        return self.query_end - self.query_start


def segments_by_read(segments):
    """Segments keyed by read id, each list sorted by query offset."""
    res = OrderedDict()
    for seg in segments:
        res.setdefault(seg.readid, []).append(seg)
    for readid in res:
        res[readid].sort(key=lambda s: (s.offset, s.chrom, s.pos))
    return res


def drop_singletons(segments):
    """Remove segments of reads that contributed only one segment."""
    counts = defaultdict(int)
    for seg in segments:
        counts[seg.readid] += 1
    return [s for s in segments if counts[s.readid] > 1]


def group_segments(segments, include_singletons=False, slop=0):
    """Cluster segments whose reference spans overlap.

    Args:
        segments (list of RawSegment): Output of the scanner.
        include_singletons (bool): Keep reads with a single segment.
        slop (int): Extra bases on each side within which segments still
            count as overlapping.

    Returns:
        list of SegmentGroup ordered by chrom, then start.
    """
    if not include_singletons:
        segments = drop_singletons(segments)

    uf = UnionFind()
    by_id = {}
    trees = defaultdict(IntervalTree)
    for seg in segments:
        sid = segment_id(seg)
        by_id[sid] = seg
        uf.find(sid)
        begin = seg.pos - slop
        end = seg.end + 1 + slop
        tree = trees[seg.chrom]
        for iv in tree.overlap(begin, end):
            uf.union(iv.data, sid)
        tree.addi(begin, end, sid)

    res = []
    for members in uf.groups().values():
        segs = sorted((by_id[m] for m in members), key=lambda s: (s.pos, s.readid, s.offset))
        chrom = segs[0].chrom
        grp_min = min(s.pos for s in segs)
        grp_max = max(s.end for s in segs)
        res.append(SegmentGroup(f'{chrom}:{grp_min}-{grp_max}', chrom, grp_min, grp_max, segs))
    res.sort(key=lambda g: (g.chrom, g.grp_min))
    lg.debug(f'{len(segments)} segments in {len(res)} groups')
    return res


def link_groups(groups):
    """Join groups that share at least one read.

    Returns:
        list of list of str: Group names per linked component, in the order
        the groups were given.
    """
    uf = UnionFind()
    first_group = {}
    for g in groups:
        uf.find(g.grp)
        for readid in sorted(g.readids):
            if readid in first_group:
                uf.union(first_group[readid], g.grp)
            else:
                first_group[readid] = g.grp
    return list(uf.groups().values())


def summarize_reads(segments):
    res = []
    for readid, segs in segments_by_read(segments).items():
        res.append(ReadSummary(
            readid=readid,
            strand=segs[0].strand,
            query_start=min(s.offset for s in segs),
            query_end=max(s.offset + s.qlen for s in segs),
            num_segments=len(segs),
            mapped=tuple(Locus(s.chrom, s.pos, s.end) for s in segs),
        ))
    return res
