"""
Graph analysis over the visible topology.
"""
