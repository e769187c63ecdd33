"""banned-users — list banned accounts from the user database.

Filters by soft-delete, admin role and activation status, then prints a
console table and optionally saves a delimited file.
"""

from banned_users.version import __version__

__all__: list[str] = ["__version__"]
