"""Domain services for users, costumes, carts and rentals."""

from src.domain.services.cart import CartService
from src.domain.services.costumes import CostumeService
from src.domain.services.rentals import RentalService
from src.domain.services.users import UserService

__all__ = ["CartService", "CostumeService", "RentalService", "UserService"]
