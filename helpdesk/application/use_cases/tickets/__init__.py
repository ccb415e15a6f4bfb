"""Use cases for tickets and their comments."""

from .add_comment import add_comment
from .create_ticket import create_ticket
from .update_ticket import update_ticket

__all__ = ["add_comment", "create_ticket", "update_ticket"]
