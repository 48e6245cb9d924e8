from .user import Role, User  # noqa: F401
from .member import Member  # noqa: F401
from .house import House  # noqa: F401
from .resource import Resource  # noqa: F401
