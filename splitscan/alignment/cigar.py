# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""CIGAR tokenizing and measurement.

A CIGAR string is read as a list of ``(op, length)`` tuples. Each alignment
descriptor is reduced to a leading clip, which places the aligned block within
the read, and a core, whose net reference and query lengths are all the
segment model needs.
"""

import re
from collections import namedtuple

from . import MalformedCigar

CIGAR_RE = re.compile(r'(\d+)([A-Za-z=])')
CIGAR_FULL_RE = re.compile(r'(?:\d+[A-Za-z=])+')

CLIP_OPS = frozenset('SH')

CigarSplit = namedtuple('CigarSplit', ['clip_rlen', 'clip_qlen', 'core', 'core_rlen', 'core_qlen'])


def tokenize(cigar):
    """Split a CIGAR string into ``(op, length)`` tuples.

    Args:
        cigar (str): CIGAR string such as ``12S48M3I5M``.

    Returns:
        list of (str, int): Operations in string order, upper-cased.

    Raises:
        MalformedCigar: if the string is empty or contains anything other
            than length/operation pairs.
    """
    if not cigar or not CIGAR_FULL_RE.fullmatch(cigar):
        raise MalformedCigar(cigar)
    return [(op.upper(), int(n)) for n, op in CIGAR_RE.findall(cigar)]


def format_cigar(tokens):
    return ''.join(f'{n}{op}' for op, n in tokens)


def orient(tokens, strand):
    """Put tokens in sequencing order. Minus-strand alignments are reversed."""
    if strand == '-':
        return tokens[::-1]
    return list(tokens)


def lengths(tokens):
    """Reference and query lengths consumed by a token sequence.

    ``N``, ``P``, ``=`` and ``X`` contribute nothing.
    """
    rlen = 0
    qlen = 0
    for op, n in tokens:
        if op == 'M':
            rlen += n
            qlen += n
        elif op == 'I':
            qlen += n
        elif op == 'D':
            rlen += n
        elif op in CLIP_OPS:
            qlen += n
    return rlen, qlen


def compress(tokens):
    """Collapse M/I/D tokens into a match run and a single net indel."""
    match = 0
    delta = 0
    for op, n in tokens:
        if op == 'M':
            match += n
        elif op == 'I':
            delta += n
        elif op == 'D':
            delta -= n
    if delta == 0:
        return [('M', match)]
    elif delta > 0:
        return [('M', match), ('I', delta)]
    else:
        return [('M', match), ('D', -delta)]


def strip_clips(tokens):
    """Remove one leading and one trailing clip token.

    Returns:
        (leading, core, trailing): ``leading`` and ``trailing`` are lists
        holding at most one clip token each.

    Raises:
        MalformedCigar: if no tokens remain once the clips are removed.
    """
    core = list(tokens)
    leading = []
    trailing = []
    if core and core[0][0] in CLIP_OPS:
        leading.append(core.pop(0))
    if core and core[-1][0] in CLIP_OPS:
        trailing.append(core.pop())
    if not core:
        raise MalformedCigar(format_cigar(tokens), 'no aligned operations in CIGAR')
    return leading, core, trailing


def split_cigar(cigar, strand):
    """Place the aligned block(s) of one alignment descriptor.

    The result is a list so that operators which break an alignment into
    several blocks can yield more than one entry. Today every descriptor
    yields exactly one.

    Args:
        cigar (str): CIGAR string as found in the record or SA tag.
        strand (str): ``+`` or ``-``.

    Returns:
        list of CigarSplit: leading clip reference/query lengths, the
        compressed core as a CIGAR string, and the core reference/query
        lengths.
    """
    tokens = orient(tokenize(cigar), strand)
    leading, core, _trailing = strip_clips(tokens)
    clip_rlen, clip_qlen = lengths(leading)
    core_rlen, core_qlen = lengths(core)
    return [
        CigarSplit(clip_rlen, clip_qlen, format_cigar(compress(core)), core_rlen, core_qlen),
    ]
