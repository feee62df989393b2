"""Domain layer - records, comparators, indexes and the table itself."""
