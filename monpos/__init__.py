"""monpos - a layout engine for relatively positioned monitors.

Each monitor is placed above, below, left or right of another monitor, with an
alignment along the other axis. The positions form a tree rooted at the main
monitor, which sits at (0, 0); the engine computes every rectangle and rejects
cycles, disconnected monitors and overlaps.
"""
