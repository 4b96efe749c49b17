"""Operator command line for docbridge."""
