"""Visualization panel served next to the analysis API."""
