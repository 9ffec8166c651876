"""Costume Rental API.

A FastAPI service for renting costumes: browse the catalogue, keep a cart,
check out into rentals and review rental history.

Layers:
- **api**: HTTP routes, request/response schemas, middleware
- **domain**: entities, repositories and services for users, costumes,
  carts and rentals
- **infrastructure**: async SQLAlchemy engine, sessions and base repository
- **core**: configuration, errors, logging and tracing
"""
