"""Infrastructure layer: persistence and other technical integrations.

Currently this is the database package: async SQLAlchemy engine and session
lifecycle, the generic repository and the FastAPI session dependency.
"""
