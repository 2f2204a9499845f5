# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Tests for report tables and formatting helpers."""

import pandas as pd
import pytest

from splitscan.alignment.segment import RawSegment
from splitscan.core import reporter
from splitscan.grouping.groups import group_segments, link_groups, summarize_reads
from splitscan.utils.helpers import format_minutes, humanize


@pytest.fixture
def segments():
    return [
        RawSegment('a', 'chr1', 1001, '+', 0, 30, 30),
        RawSegment('a', 'chr5', 201, '-', 30, 20, 20),
        RawSegment('b', 'chr1', 990, '+', 0, 25, 25),
    ]


class TestHumanize:
    @pytest.mark.parametrize('x,expected', [
        (0, '0bp'), (999, '999bp'), (12345, '12kbp'), (3200000, '3mbp'), (-1200, '-1kbp'),
    ])
    def test_suffixes(self, x, expected):
        assert humanize(x) == expected

    def test_format_minutes(self):
        assert format_minutes(125) == '2 minutes and 5 secs'


class TestFrames:
    def test_segments_frame(self, segments):
        df = reporter.segments_frame(segments)
        assert list(df.columns) == ['id', 'readid', 'chrom', 'pos', 'strand', 'offset', 'rlen', 'qlen']
        assert df['id'].iloc[0] == 'a-chr1-1001-+-0-30-30'
        assert len(df) == 3

    def test_groups_frame(self, segments):
        groups = group_segments(segments, include_singletons=True)
        df = reporter.groups_frame(groups, link_groups(groups))
        assert list(df['grp']) == ['chr1:990-1030', 'chr5:201-220']
        assert list(df['link']) == [0, 0]
        assert list(df['num_reads']) == [2, 1]
        assert df['width'].iloc[0] == '41bp'

    def test_groups_frame_without_links(self, segments):
        df = reporter.groups_frame(group_segments(segments, include_singletons=True))
        assert list(df['link']) == [-1, -1]

    def test_reads_frame_sorted_by_segment_count(self, segments):
        df = reporter.reads_frame(summarize_reads(segments))
        assert list(df['readid']) == ['a', 'b']
        assert df['mapped'].iloc[0] == 'chr1:1001-1030,chr5:201-220'


class TestWrite:
    def test_write_segments_with_run_info(self, segments, tmp_path):
        path = str(tmp_path / 'segments.tsv')
        reporter.write_segments(segments, path, run_info={'version': 'test', 'segments': 3})
        with open(path) as fh:
            assert fh.readline() == '## RunInfo\tversion:test\tsegments:3\n'
        df = pd.read_csv(path, sep='\t', comment='#')
        assert list(df['pos']) == [1001, 201, 990]

    def test_write_reads(self, segments, tmp_path):
        path = str(tmp_path / 'reads.tsv')
        reporter.write_reads(summarize_reads(segments), path)
        df = pd.read_csv(path, sep='\t')
        assert list(df['num_segments']) == [2, 1]
