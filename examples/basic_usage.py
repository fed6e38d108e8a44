#!/usr/bin/env python3
"""
Basic usage example for DazzleStructLib.

This example demonstrates:
- Path-addressed reads and writes on a nested settings structure
- Walking the structure and stopping early
- Pattern queries and prefix search
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlestructlib import STOP, Tree, get_tree_stats, prefix_search


def main():
    """Demonstrate the main building blocks."""
    tree = Tree()
    tree.set('server.host', 'localhost').set('server.port', 8080)
    tree.set('users', [
        {'name': 'ada', 'email': 'ada@example.com'},
        {'name': 'alan'},
        {'name': 'grace', 'email': 'grace@example.com'},
    ])

    print(f"server.port = {tree.get('server.port')}")
    print(f"Emails: {tree.query('users.*.email')}")

    print("\nFirst elements until 'users':")

    visited = []

    def show(path, key):
        print(f"  {path}")
        visited.append(path)
        if key == 'users':
            return STOP

    walker = tree.walk(show)
    print(f"Stopped: {walker.stopped} at {visited[-1]}")

    stats = get_tree_stats(tree.items)
    print(f"\nNodes: {stats['total_nodes']} "
          f"(leaves: {stats['leaf_nodes']}, max depth: {stats['max_depth']})")

    names = [user['name'] for user in tree.get('users')]
    print(f"Names starting with 'a': {prefix_search(names, 'a')}")


if __name__ == "__main__":
    print("DazzleStructLib - Basic Usage Example")
    print("=" * 50)
    main()
