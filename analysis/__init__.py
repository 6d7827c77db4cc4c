"""
Analysis package for the Resource Allocation Graph Analyzer.
Combines algorithm outputs into summaries and metrics.
"""
