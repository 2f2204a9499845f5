# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Segment records and their identity.

A segment is one contiguous aligned block of a read with its clipped bases
removed. Its identity is structural: the seven fields joined in fixed order.
"""

import re
from dataclasses import dataclass

SEGMENT_FIELDS = ('readid', 'chrom', 'pos', 'strand', 'offset', 'rlen', 'qlen')
ID_SEP = '-'

LOCUS_RE = re.compile(r'^(chr([0-9]+|X|Y|M|MT)):([0-9][0-9,]*)-([0-9][0-9,]*)$')


@dataclass(frozen=True)
class Locus:
    """Genomic interval. ``start`` is 1-based inclusive."""
    chrom: str
    start: int
    end: int

    def __str__(self):
        return f'{self.chrom}:{self.start}-{self.end}'


@dataclass(frozen=True)
class RawSegment:
    readid: str
    chrom: str
    pos: int                      # 1-based reference start of the aligned block
    strand: str                   # '+' or '-'
    offset: int                   # query bases preceding the block, clips included
    rlen: int                     # reference bases consumed by the block
    qlen: int                     # query bases consumed by the block

    @property
    def end(self):
        """1-based inclusive reference end."""
        return self.pos + self.rlen - 1

    @property
    def is_valid(self):
        return self.rlen > 0 and self.qlen > 0

    def astuple(self):
        return tuple(getattr(self, f) for f in SEGMENT_FIELDS)


@dataclass(frozen=True)
class Segment(RawSegment):
    id: str = ''

    def raw(self):
        return RawSegment(*self.astuple())


def segment_id(seg):
    """Deterministic identity string for a segment.

    Field-wise equal segments always produce equal identities, and this is
    the only notion of duplicate used for segments.
    """
    return ID_SEP.join(str(v) for v in seg.astuple())


def make_segment(seg):
    return Segment(*seg.astuple(), id=segment_id(seg))


def _parse_coords(m):
    return int(m.group(3).replace(',', '')), int(m.group(4).replace(',', ''))


def valid_locus(txt):
    """Check a locus string of the form ``chr1:1000-2000``.

    Returns:
        True if valid, False if it does not parse, or an error message when
        it parses but the interval is empty or starts before 1.
    """
    m = LOCUS_RE.match(txt or '')
    if not m:
        return False
    start, end = _parse_coords(m)
    if start < 1:
        return 'start must be at least 1'
    if start > end:
        return 'end must be greater than start'
    return True


def parse_locus(txt):
    """Parse ``chr1:1,000-2,000`` into a Locus.

    Returns None if the text does not parse or the start is before 1.
    """
    m = LOCUS_RE.match(txt or '')
    if not m:
        return None
    start, end = _parse_coords(m)
    if start < 1:
        return None
    return Locus(m.group(1), start, end)
