"""Business logic services package.

Contains the wallet report aggregation engine: facet filters and reducers,
the concurrent report builder, and the paced batch checker.
"""
