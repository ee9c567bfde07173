"""
People

This package provides the Person entity and its repository.
"""

from peopledb.person.model import Person
from peopledb.person.repository import PeopleRepository

__all__ = ["Person", "PeopleRepository"]
