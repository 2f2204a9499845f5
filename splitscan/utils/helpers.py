# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Small formatting and region helpers."""

SUFFIXES = ['', 'k', 'm', 'g', 't', 'p', 'e']


def humanize(x):
    """Base-pair count with a magnitude suffix, e.g. ``12345 -> '12kbp'``."""
    neg = x < 0
    if neg:
        x = -x
    n = 0
    while x >= 1000 and n < len(SUFFIXES) - 1:
        n += 1
        x /= 1000
    prefix = '-' if neg else ''
    return f'{prefix}{round(x)}{SUFFIXES[n]}bp'


def format_minutes(seconds):
    mins = seconds // 60
    secs = seconds - (mins * 60)
    return '%d minutes and %d secs' % (mins, secs)


def merge_overlapping_regions(regions, padding=0):
    """Pad regions and merge the ones that overlap or touch.

    Args:
        regions: iterable of (chrom, start, end) tuples, 1-based inclusive.
        padding: bp to add on each side. Starts do not go below 1.

    Returns:
        List of merged (chrom, start, end) tuples sorted by chrom and start.
    """
    padded = sorted(
        (chrom, max(1, start - padding), end + padding) for chrom, start, end in regions
    )
    merged = []
    for chrom, start, end in padded:
        if merged and merged[-1][0] == chrom and start <= merged[-1][2] + 1:
            prev = merged[-1]
            merged[-1] = (chrom, prev[1], max(prev[2], end))
        else:
            merged.append((chrom, start, end))
    return merged
