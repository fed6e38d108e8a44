"""Core abstractions for DazzleStructLib.

This module contains the capability contracts and the concrete types that
implement them: ordered containers, paths, walkers and the Tree facade.
"""

from .capabilities import Ordered, Traversable, Addressable
from .ordered import OrderedArray, OrderedList, OrderedStringList
from .path import Path, ABSENT, normalize, encode_segments, decode_segments
from .walker import TreeWalker, WalkerState, STOP
from .traverser import IterativeTreeWalker, RecursiveTreeWalker, create_walker
from .query import (
    Query, ExactKey, Wildcard, Options, Skip, ValuePredicate, KeyValue, WILDCARD, SKIP
)
from .tree import Tree

__all__ = [
    "Ordered",
    "Traversable",
    "Addressable",
    "OrderedArray",
    "OrderedList",
    "OrderedStringList",
    "Path",
    "ABSENT",
    "normalize",
    "encode_segments",
    "decode_segments",
    "TreeWalker",
    "WalkerState",
    "STOP",
    "IterativeTreeWalker",
    "RecursiveTreeWalker",
    "create_walker",
    "Query",
    "ExactKey",
    "Wildcard",
    "Options",
    "Skip",
    "ValuePredicate",
    "KeyValue",
    "WILDCARD",
    "SKIP",
    "Tree",
]
