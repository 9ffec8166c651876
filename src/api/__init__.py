"""HTTP layer of the costume rental service.

- **main**: application factory, lifespan, health and info endpoints
- **routers**: costumes, cart, rentals/checkout and auth endpoints
- **dependencies**: bearer authentication and service wiring
- **middleware**: security headers, correlation IDs, request logging and
  exception handlers
- **schemas**: request/response models and the error body
- **utils**: orjson response class
"""
