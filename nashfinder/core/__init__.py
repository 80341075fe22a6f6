"""Equilibrium search engine: enumeration, LP construction, solving, extraction."""
