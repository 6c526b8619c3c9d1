from components.borrow_request.repository import BorrowRequestRepository
from components.equipment.repository import EquipmentRepository
from components.user.repository import UserRepository
from scripts.seed_data import EQUIPMENT, USERS, seed_data


class TestSeedData:

    async def test_seed_populates_catalog_and_request(self, session):
        await seed_data(session)

        assert len(await EquipmentRepository(session).get_all()) == len(EQUIPMENT)
        assert len(await UserRepository(session).get_all()) == len(USERS)
        requests = await BorrowRequestRepository(session).get_all()
        assert len(requests) == 1
        details = await BorrowRequestRepository(session).get_request_details(requests[0].id)
        assert [row.equipment_name for row in details] == ["Laptop", "Projector"]

    async def test_seed_is_repeatable(self, session):
        await seed_data(session)
        await seed_data(session)

        assert len(await UserRepository(session).get_all()) == len(USERS)
