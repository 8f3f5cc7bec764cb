from mangashelf.models.manga import Manga
from mangashelf.models.user import User


__all__ = ["Manga", "User"]
