"""
Transformation Layer - Pure reshaping of fetched sites

- Proxy response envelopes
- Client-side site filters and KPI calculation
- Schema and data-quality validation
No I/O in this layer.
"""
