"""
Algorithms package for the Resource Allocation Graph Analyzer.
Contains matrix projections, wait-for graph construction, deadlock detection
and the Banker's safety evaluation.
"""
