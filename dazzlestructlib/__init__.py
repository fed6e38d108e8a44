"""DazzleStructLib - In-memory data structures for nested data.

DazzleStructLib provides self-sorting containers with floor, range and
prefix search, a Path type for addressing nested key-value structures, and
a pair of interchangeable walkers that visit such structures in pre-order.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Ordered containers:
    from dazzlestructlib import OrderedStringList
    OrderedStringList(names).get_range_by_prefix("an")

Nested structures:
    from dazzlestructlib import Tree
    Tree(data).query(["users", "*", "email"])
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

# Library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .errors import (
    DazzleStructError,
    InvalidArgumentError,
    DecodingError,
    TraversalInProgressError,
    ConfigurationError,
)
from .config import TraversalStrategy, PrefixOverflowPolicy, TreeConfig
from .core import (
    Ordered,
    Traversable,
    Addressable,
    OrderedArray,
    OrderedList,
    OrderedStringList,
    Path,
    ABSENT,
    normalize,
    encode_segments,
    decode_segments,
    TreeWalker,
    WalkerState,
    STOP,
    IterativeTreeWalker,
    RecursiveTreeWalker,
    create_walker,
    Query,
    ExactKey,
    Wildcard,
    Options,
    Skip,
    ValuePredicate,
    KeyValue,
    WILDCARD,
    SKIP,
    Tree,
)
from .api import (
    walk_tree,
    get_tree_paths,
    count_nodes,
    get_leaf_items,
    find_nodes,
    get_tree_stats,
    prefix_search,
)

__all__ = [
    "__version__",
    # Errors
    "DazzleStructError",
    "InvalidArgumentError",
    "DecodingError",
    "TraversalInProgressError",
    "ConfigurationError",
    # Config
    "TraversalStrategy",
    "PrefixOverflowPolicy",
    "TreeConfig",
    # Core
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
    # API
    "walk_tree",
    "get_tree_paths",
    "count_nodes",
    "get_leaf_items",
    "find_nodes",
    "get_tree_stats",
    "prefix_search",
]
