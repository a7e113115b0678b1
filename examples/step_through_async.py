#!/usr/bin/env python3
"""
Step-by-step async walkthrough of AVL rotations.

This example demonstrates:
- An async rotation observer that narrates each rotation
- Speed scaling with a Pacer
- Replaying a scripted list of inserts and deletes
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from avltreelib.aio import narrated_tree, replay


async def main():
    """Replay a short script at the speed given on the command line."""
    speed = float(sys.argv[1]) if len(sys.argv) > 1 else 8.0

    tree, pacer = narrated_tree(
        speed=speed,
        emit=print,
        progress_callback=lambda event: print(f"  {event}"),
    )

    script = [
        ('insert', 30), ('insert', 20), ('insert', 10),   # Left-Left
        ('insert', 40), ('insert', 50),                   # Right-Right
        ('insert', 45),                                   # Right-Left
        ('delete', 10),
    ]
    results = await replay(tree, script, pacer=pacer, delay_ms=500)

    print("-" * 50)
    for (name, value), ok in zip(script, results):
        print(f"{name} {value}: {'ok' if ok else 'no-op'}")
    print(f"levels: {tree.level_order()}")


if __name__ == "__main__":
    asyncio.run(main())
