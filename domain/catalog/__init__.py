"""Course catalog domain exports."""
from .entity import Course, CourseCatalog

__all__ = ["Course", "CourseCatalog"]
