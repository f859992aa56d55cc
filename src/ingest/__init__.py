"""Puzzle input loading.

This module reads almanac text from local files or the inputs cache.
It parses seeds and stage rows into typed engine models.
"""
