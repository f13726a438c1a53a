"""Domain layer for motionflow.

Pure procedure logic: rosters, motions and the stage state machine.
Nothing in this package performs I/O.
"""
