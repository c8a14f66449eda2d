"""
PersonnelStore - record access for the personnel table.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillmatch.models.person import Person


class PersonnelStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> list[Person]:
        result = await self.session.execute(select(Person).order_by(Person.id))
        return list(result.scalars().all())

    async def get(self, person_id: int) -> Person | None:
        result = await self.session.execute(select(Person).where(Person.id == person_id))
        return result.scalar_one_or_none()

    async def get_for_update(self, person_id: int) -> Person | None:
        """
        Fetch and row-lock a person until the transaction ends.
        Assignment mutations for one person are serialized on this lock.
        """
        result = await self.session.execute(
            select(Person).where(Person.id == person_id).with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Person | None:
        result = await self.session.execute(select(Person).where(Person.email == email))
        return result.scalar_one_or_none()

    async def set_status(self, person: Person, status: str) -> None:
        person.status = status
        await self.session.flush()

    async def create(self, data: dict[str, Any]) -> Person:
        person = Person(**data)
        self.session.add(person)
        await self.session.flush()
        return person

    async def update(self, person: Person, data: dict[str, Any]) -> Person:
        for key, value in data.items():
            setattr(person, key, value)
        await self.session.flush()
        return person

    async def delete(self, person: Person) -> None:
        await self.session.delete(person)
        await self.session.flush()
