"""Blog list backend package.

This package exposes the service, repository and model modules used by
the FastAPI application built in `bloglist.main`. Individual modules
contain the concrete implementations and documentation.
"""
