# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Alignment-level primitives: CIGAR strings, segments and record scanning."""


class SplitscanError(Exception):
    """Base class for errors raised while extracting segments."""


class MalformedCigar(SplitscanError, ValueError):
    """A CIGAR string could not be tokenized or has no alignable core."""

    def __init__(self, cigar, reason='malformed CIGAR string'):
        self.cigar = cigar
        super().__init__(f'{reason}: {cigar!r}')


class MalformedSATag(SplitscanError, ValueError):
    """An SA tag entry has fewer than the four required fields."""

    def __init__(self, entry):
        self.entry = entry
        super().__init__(f'SA entry needs chrom,pos,strand,cigar: {entry!r}')


class AbortedByCaller(SplitscanError):
    """The progress callback asked for the scan to stop."""

    def __init__(self, count):
        self.count = count
        super().__init__(f'progress function aborted after {count} alignment records')
