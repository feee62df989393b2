"""
Indexed Table - In-memory tabular store with secondary indexes

An in-memory table of text records with optional per-column ordered
indexes, equality and range predicates, conjunctive queries resolved by
set intersection, and flat-file persistence.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
