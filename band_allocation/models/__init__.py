from .band import DEFAULT_AMOUNT, DEFAULT_ROLE, DEFAULT_USER_ID, Entry, User, utc_now

__all__ = ["DEFAULT_AMOUNT", "DEFAULT_ROLE", "DEFAULT_USER_ID", "Entry", "User", "utc_now"]
