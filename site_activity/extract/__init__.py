"""
Extract Layer - Pure I/O to the site-activity upstream API

This layer handles all external data fetching with no business logic.
- No imports from transform or load layers
- Page requests, bounded retries, bounded-concurrency waves
- Returns raw records that the transform layer can reshape
"""
