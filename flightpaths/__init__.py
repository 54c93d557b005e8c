"""Top-level package for flightpaths.

Route discovery and ranking over a sparse set of scheduled airline
services: given a home airport, list direct and one-stop options to a
fixed set of destinations, ranked by a duration/frequency composite.
"""
