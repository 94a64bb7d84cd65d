"""Opportuna job board client: job listings, saved jobs, application tracking and auth."""

__version__ = "0.1.0"
