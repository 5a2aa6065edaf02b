# Importing the models registers them with Base.metadata
from foodshelf.models.user import User
from foodshelf.models.food import Food

__all__ = ["User", "Food"]
