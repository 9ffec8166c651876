"""Pydantic request and response models.

Resource schemas use camelCase field names on the wire (``costumeId``,
``rentalFee``) and accept snake_case when built from Python code.
"""
