# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Record sources for the segment scanner.

A record source exposes ``stream_records(chrom, start, end)``, an async
iterator of record batches for the 0-based half-open interval
``[start, end)``. Records carry the attributes of
:class:`pysam.AlignedSegment`.
"""

import asyncio
import logging as lg

import pysam

DEFAULT_BATCH_SIZE = 1000


class PysamRecordSource:
    """Streams records from an indexed BAM/CRAM through pysam.

    The file is opened on first use and kept open until :meth:`close`.
    """

    def __init__(self, samfile, batch_size=DEFAULT_BATCH_SIZE, threads=1):
        self.samfile = samfile
        self.batch_size = batch_size
        self.threads = threads
        self._sf = None

    def open(self):
        if self._sf is None:
            self._sf = pysam.AlignmentFile(self.samfile, check_sq=False, threads=self.threads)
            if not self._sf.has_index():
                _is_coordinate_sorted = self._sf.header.get('HD', {}).get('SO') == 'coordinate'
                if not _is_coordinate_sorted:
                    self._sf.close()
                    self._sf = None
                    raise ValueError(f'{self.samfile} is not coordinate-sorted; sort and index it first')
                lg.info('Coordinate-sorted BAM without index, creating .bai')
                self._sf.close()
                pysam.index(self.samfile)
                self._sf = pysam.AlignmentFile(self.samfile, check_sq=False, threads=self.threads)
        return self._sf

    def close(self):
        if self._sf is not None:
            self._sf.close()
            self._sf = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc):
        self.close()

    @property
    def references(self):
        return self.open().references

    async def stream_records(self, chrom, start, end):
        sf = self.open()
        if chrom not in sf.references:
            lg.warning(f'Reference {chrom} not present in {self.samfile}')
            return
        batch = []
        for aln in sf.fetch(chrom, start, end):
            batch.append(aln)
            if len(batch) >= self.batch_size:
                yield batch
                batch = []
                await asyncio.sleep(0)
        if batch:
            yield batch
