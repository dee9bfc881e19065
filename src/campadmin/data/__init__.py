"""Upstream access: API client and query cache"""
