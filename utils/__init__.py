"""
Utilities package for the Resource Allocation Graph Analyzer.
Contains the JSON graph loader and the logger.
"""
