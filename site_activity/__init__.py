"""
Site Activity - batched proxy for the site-activity upstream API

Fetches onboarding pipeline sites (consent -> sharing -> appointment) from a
slow paginated upstream, in bounded concurrent waves, and serves them to the
dashboard together with KPI helpers.
"""

__version__ = "0.1.0"
