"""Ordering bounded context: checkout and order persistence."""
