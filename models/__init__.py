"""
Models package for the Resource Allocation Graph Analyzer.
Contains the graph model, its node/edge types, error types and analysis reports.
"""
