"""
Virtual try-on survey insights engine.

Derives distributions, user segments, a conversion funnel and a market-size
estimate from raw survey responses.
"""

__version__ = "0.1.0"
