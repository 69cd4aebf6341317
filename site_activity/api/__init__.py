"""
API Layer - HTTP proxy in front of the batch fetcher
"""
