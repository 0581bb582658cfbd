"""Routing — exact-match method + path route table."""
