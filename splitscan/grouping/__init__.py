# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Clustering of segments into read-linked, overlapping groups."""

from .unionfind import UnionFind  # noqa: F401
