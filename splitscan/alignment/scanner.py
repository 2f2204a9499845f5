# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Segment scanning over alignment records.

For every record overlapping the requested loci, the primary alignment and
each supplementary alignment named in its SA tag are turned into segments.
Segments are deduplicated on their identity string, so the same split read
seen from several loci, or from both its primary and supplementary records,
is reported once.
"""

import logging as lg
from collections import namedtuple
from dataclasses import dataclass, replace
from typing import Callable, Optional

from . import AbortedByCaller, MalformedSATag
from .cigar import split_cigar
from .segment import RawSegment, segment_id

Descriptor = namedtuple('Descriptor', ['chrom', 'pos', 'strand', 'cigar'])


@dataclass(frozen=True)
class ScannerOptions:
    """Options for scanning aligned segments.

    Attributes:
        max_reads: Maximum number of records to examine per locus. 0 scans
            without limit, which can be slow on deep loci.
        include_singletons: Keep reads with a single aligned segment. The
            scanner returns every segment regardless; this is read by
            :func:`splitscan.grouping.groups.group_segments`.
        progress: Called as ``progress(n)`` before each locus and
            ``progress(n, (chrom, pos))`` for each mapped record. Returning
            True aborts the scan with :class:`AbortedByCaller`.
    """
    max_reads: int = 2000
    include_singletons: bool = False
    progress: Optional[Callable] = None


DEFAULT_SCANNER_OPTIONS = ScannerOptions()


def parse_sa_tag(text):
    """Parse an SA tag into alignment descriptors.

    Entries are ``chrom,pos,strand,cigar[,mapq,nm]`` separated by ``;``.
    Empty entries, such as the one after a trailing ``;``, are ignored.

    Raises:
        MalformedSATag: if an entry has fewer than four fields.
    """
    descriptors = []
    for entry in text.split(';'):
        if entry == '':
            continue
        parts = entry.split(',')
        if len(parts) < 4:
            raise MalformedSATag(entry)
        try:
            pos = int(parts[1])
        except ValueError:
            raise MalformedSATag(entry) from None
        descriptors.append(Descriptor(parts[0], pos, parts[2], parts[3]))
    return descriptors


def record_descriptors(rec, chrom, pos):
    """Distinct descriptors for a record: its own alignment, then its SA list."""
    strand = '-' if rec.is_reverse else '+'
    items = {Descriptor(chrom, pos, strand, rec.cigarstring): None}
    if rec.has_tag('SA'):
        for d in parse_sa_tag(rec.get_tag('SA')):
            items.setdefault(d, None)
    return list(items)


def _check_progress(options, count, chrom_and_pos=None):
    if options.progress is None:
        return
    if chrom_and_pos is None:
        stop = options.progress(count)
    else:
        stop = options.progress(count, chrom_and_pos)
    if stop:
        raise AbortedByCaller(count)


async def _scan_locus(source, locus, options, found):
    chrom = locus.chrom
    start = locus.start - 1
    end = locus.end
    rec_count = 0
    _check_progress(options, rec_count)

    stream = source.stream_records(chrom, start, end)
    try:
        async for recs in stream:
            for rec in recs:
                rec_count += 1
                if options.max_reads > 0 and rec_count > options.max_reads:
                    lg.warning(f'too many alignment records for locus {locus}')
                    return rec_count
                if rec.is_unmapped:
                    continue
                qname = rec.query_name
                pos = rec.reference_start + 1
                _check_progress(options, rec_count, (chrom, pos))
                if rec.is_secondary:
                    continue
                for d in record_descriptors(rec, chrom, pos):
                    for split in split_cigar(d.cigar, d.strand):
                        raw = RawSegment(
                            qname, d.chrom, d.pos + split.clip_rlen, d.strand,
                            split.clip_qlen, split.core_rlen, split.core_qlen,
                        )
                        found.setdefault(segment_id(raw), raw)
    finally:
        aclose = getattr(stream, 'aclose', None)
        if aclose is not None:
            await aclose()
    return rec_count


async def scan_segments(source, loci, options=None, **overrides):
    """Extract the distinct aligned segments of reads overlapping ``loci``.

    Args:
        source: Record source with an async ``stream_records(chrom, start, end)``.
        loci (list of Locus): Intervals to scan, in order.
        options (ScannerOptions): Scan options; keyword arguments override
            individual fields.

    Returns:
        list of RawSegment: Valid segments in first-seen order, at most one
        per segment identity.

    Raises:
        AbortedByCaller: if the progress callback returned True. No partial
            result is returned.
        MalformedCigar: if a primary or supplementary CIGAR is malformed.
        MalformedSATag: if an SA tag entry is malformed.
    """
    options = replace(options or DEFAULT_SCANNER_OPTIONS, **overrides)
    if not loci:
        raise ValueError('at least one locus is required')

    found = {}
    for locus in loci:
        _before = len(found)
        n = await _scan_locus(source, locus, options, found)
        lg.debug(f'{locus}: {n} records, {len(found) - _before} new segments')

    res = [raw for raw in found.values() if raw.is_valid]
    lg.info(f'Scanned {len(loci)} loci: {len(res)} segments from '
            f'{len({r.readid for r in res})} reads')
    return res
