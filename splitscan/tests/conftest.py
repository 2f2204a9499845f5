# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Shared fixtures: in-memory alignment records and record sources."""

import asyncio
from dataclasses import dataclass, field

import pytest

from splitscan.alignment.cigar import lengths, tokenize


@dataclass
class FakeRecord:
    """Minimal stand-in for pysam.AlignedSegment."""
    query_name: str
    reference_name: str
    reference_start: int          # 0-based
    cigarstring: str
    is_reverse: bool = False
    is_unmapped: bool = False
    is_secondary: bool = False
    tags: dict = field(default_factory=dict)

    @property
    def reference_end(self):
        if self.is_unmapped:
            return self.reference_start + 1
        return self.reference_start + lengths(tokenize(self.cigarstring))[0]

    def has_tag(self, tag):
        return tag in self.tags

    def get_tag(self, tag):
        return self.tags[tag]


class ListRecordSource:
    """Serves records overlapping the requested interval in fixed-size batches."""

    def __init__(self, records, batch_size=2):
        self.records = list(records)
        self.batch_size = batch_size
        self.requests = []
        self.closed = 0

    async def stream_records(self, chrom, start, end):
        self.requests.append((chrom, start, end))
        hits = [
            r for r in self.records
            if r.reference_name == chrom and r.reference_start < end and r.reference_end > start
        ]
        try:
            for i in range(0, len(hits), self.batch_size):
                yield hits[i:i + self.batch_size]
                await asyncio.sleep(0)
        finally:
            self.closed += 1


@pytest.fixture
def split_read_records():
    """One read split across chr1 and chr2, plus an ordinary read on chr1.

    read1 primary: chr1:1001 30M20S (+), supplementary: chr2:501 20M30H (-).
    """
    return [
        FakeRecord('read1', 'chr1', 1000, '30M20S',
                   tags={'SA': 'chr2,501,-,20M30S,60,0;'}),
        FakeRecord('plain', 'chr1', 1010, '50M'),
        FakeRecord('read1', 'chr2', 500, '20M30H', is_reverse=True,
                   tags={'SA': 'chr1,1001,+,30M20S,60,0;'}),
    ]


def run(coro):
    return asyncio.run(coro)


def _aligned_segment(pysam, header, name, ref_id, start, cigar, flag=0, sa=None):
    a = pysam.AlignedSegment(header)
    a.query_name = name
    a.flag = flag
    a.reference_id = ref_id
    a.reference_start = start
    a.mapping_quality = 60
    a.cigarstring = cigar
    qlen = sum(n for op, n in tokenize(cigar) if op in 'MIS=X')
    a.query_sequence = 'ACGT' * (qlen // 4) + 'A' * (qlen % 4)
    if sa is not None:
        a.set_tag('SA', sa)
    return a


@pytest.fixture
def bam_path(tmp_path):
    """Coordinate-sorted, unindexed BAM holding the records of ``split_read_records``."""
    pysam = pytest.importorskip('pysam')
    path = str(tmp_path / 'split.bam')
    header = pysam.AlignmentHeader.from_dict({
        'HD': {'VN': '1.6', 'SO': 'coordinate'},
        'SQ': [{'SN': 'chr1', 'LN': 10000}, {'SN': 'chr2', 'LN': 10000}],
    })
    with pysam.AlignmentFile(path, 'wb', header=header) as out:
        out.write(_aligned_segment(pysam, header, 'read1', 0, 1000, '30M20S',
                                   sa='chr2,501,-,20M30S,60,0;'))
        out.write(_aligned_segment(pysam, header, 'plain', 0, 1010, '50M'))
        out.write(_aligned_segment(pysam, header, 'dup', 0, 1500, '50M', flag=256))
        out.write(_aligned_segment(pysam, header, 'read1', 1, 500, '20M30H', flag=16 | 2048,
                                   sa='chr1,1001,+,30M20S,60,0;'))
    return path
