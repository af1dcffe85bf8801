"""Aggregation core for the administrative project review (RS) dashboard.

This package contains:
- data loading (RS CSV extracts -> pandas)
- the project join index
- aggregators producing JSON-serializable payloads
- the artifact writer and batch pipeline driver
"""
