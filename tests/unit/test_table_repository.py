"""Unit tests for the table repository."""

from sqlmodel import Session

from tables_service.entities.table import Table, TableEntity, TableRepository


class TestTableRepository:
    def test_create_and_get(self, session: Session):
        repository = TableRepository(session)

        created = repository.create(Table(id=5, name="alpha", capacity=4))
        session.commit()

        assert created == Table(id=5, name="alpha", capacity=4)
        assert repository.get(5) == created
        assert session.get(TableEntity, 5) is not None

    def test_get_missing_returns_none(self, session: Session):
        assert TableRepository(session).get(1) is None

    def test_next_id_on_empty_store(self, session: Session):
        assert TableRepository(session).next_id() == 1

    def test_next_id_follows_highest(self, session: Session):
        repository = TableRepository(session)
        repository.create(Table(id=3, name="a"))
        repository.create(Table(id=10, name="b"))

        assert repository.next_id() == 11

    def test_update_applies_only_given_fields(self, session: Session):
        repository = TableRepository(session)
        repository.create(Table(id=1, name="alpha", description="window", capacity=2))

        updated = repository.update(1, {"name": "beta"})

        assert updated == Table(id=1, name="beta", description="window", capacity=2)

    def test_update_missing_returns_none(self, session: Session):
        assert TableRepository(session).update(1, {"name": "beta"}) is None

    def test_delete(self, session: Session):
        repository = TableRepository(session)
        repository.create(Table(id=1, name="alpha"))

        assert repository.delete(1) is True
        assert repository.delete(1) is False
        assert repository.exists(1) is False

    def test_list_page_is_ordered_by_id(self, session: Session):
        repository = TableRepository(session)
        for table_id in (4, 2, 3, 1):
            repository.create(Table(id=table_id, name=f"t{table_id}"))

        assert repository.count() == 4
        assert [t.id for t in repository.list_page(0, 3)] == [1, 2, 3]
        assert [t.id for t in repository.list_page(3, 3)] == [4]
        assert repository.list_page(6, 3) == []

    def test_list_page_far_past_the_end(self, session: Session):
        repository = TableRepository(session)
        repository.create(Table(id=1, name="alpha"))

        assert repository.list_page(10**19, 20) == []
