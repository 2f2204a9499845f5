# -*- coding: utf-8 -*-

# This file is part of Splitscan.
#
# Licensed under MIT License.

"""Disjoint-set forest over string keys, with path compression and union by rank."""

from collections import OrderedDict


class UnionFind:
    """Partition of string keys into disjoint sets.

    Keys are registered lazily: the first :meth:`find` of an unseen key makes
    it a singleton root of rank 0. Sets only ever merge.
    """

    def __init__(self):
        self.parent = {}
        self.rank = {}

    def __contains__(self, key):
        return key in self.parent

    def __len__(self):
        return len(self.parent)

    def find(self, key):
        """Return the root of ``key``'s set, compressing the path to it."""
        if key not in self.parent:
            self.parent[key] = key
            self.rank[key] = 0
            return key

        root = key
        while self.parent[root] != root:
            root = self.parent[root]

        while key != root:
            nxt = self.parent[key]
            self.parent[key] = root
            key = nxt
        return root

    def union(self, x, y):
        """Merge the sets of ``x`` and ``y`` and return the resulting root.

        On equal rank the root of ``x`` is kept and its rank grows by one.
        """
        xr = self.find(x)
        yr = self.find(y)
        if xr == yr:
            return xr
        if self.rank[xr] < self.rank[yr]:
            self.parent[xr] = yr
            return yr
        if self.rank[xr] > self.rank[yr]:
            self.parent[yr] = xr
            return xr
        self.parent[yr] = xr
        self.rank[xr] += 1
        return xr

    def groups(self):
        """Members of each set keyed by root, in key registration order."""
        res = OrderedDict()
        for key in list(self.parent):
            res.setdefault(self.find(key), []).append(key)
        return res
