"""Domain layer: costume rental entities, repositories and services.

Services receive an ``AsyncSession`` and raise ``CostumeRentalError``
subclasses; they know nothing about HTTP.
"""
