from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from peopledb.crud import identity_field


@dataclass
class Person:
    """
    A row of the people table.

    ``dob`` must be timezone-aware. Equality compares aware datetimes as
    instants, so the same moment in two offsets is equal.
    """

    first_name: str
    last_name: str
    dob: datetime
    salary: Decimal = Decimal("0")
    id: int | None = identity_field()

    def __str__(self) -> str:
        return (
            f"First name: {self.first_name}, Last name: {self.last_name}, "
            f"DOB: {self.dob.isoformat()}, ID: {self.id}"
        )
