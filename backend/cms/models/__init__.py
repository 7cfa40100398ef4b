from cms.models.category import Category

__all__ = [
    "Category",
]
