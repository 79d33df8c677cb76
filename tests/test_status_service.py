from datetime import timedelta

import pytest

from apps.core.errors import MalformedExpression
from apps.services.status_service import (
    EXPRESSION_MAX_LENGTH,
    InvalidTimeWindow,
    StatusLookupService,
    check_time_window,
)
from apps.services.store import StatusNotFound

from conftest import NOW, MemoryStatusStore


def _fields(**overrides):
    fields = {
        "device_types": ["ios"],
        "device_sem_version": ">=13.0",
        "app_sem_version": ">=1.0.0 <2.0.0|=3.1.*",
        "type": "maintenance",
        "title": "server maintenance",
        "is_activated": True,
    }
    fields.update(overrides)
    return fields


class TestCheck:

    async def test_returns_matching_statuses_in_order(self, make_status):
        later = make_status(device_types=["ios"], start_time=NOW + timedelta(hours=1),
                            end_time=NOW + timedelta(hours=2))
        always = make_status(device_types=["*"])
        other_device = make_status(device_types=["android"])
        service = StatusLookupService(MemoryStatusStore([later, always, other_device]))
        assert await service.check("ios", "14.0", "1.0.0", now=NOW) == [always, later]

    async def test_defaults_to_wildcard_query(self, make_status):
        statuses = [make_status(device_types=["ios"], app_sem_version="=9"), make_status(device_types=["android"])]
        service = StatusLookupService(MemoryStatusStore(statuses))
        assert len(await service.check(now=NOW)) == 2

    async def test_empty_query_values_fall_back_to_wildcard(self, make_status):
        service = StatusLookupService(MemoryStatusStore([make_status(device_types=["ios"])]))
        assert len(await service.check("", "", "", now=NOW)) == 1

    async def test_no_match_is_empty_not_error(self, make_status):
        service = StatusLookupService(MemoryStatusStore([make_status(app_sem_version="<1.0")]))
        assert await service.check("ios", "*", "5.0", now=NOW) == []

    async def test_corrupt_record_does_not_block_lookup(self, make_status):
        broken = make_status(device_sem_version="=>1")
        healthy = make_status()
        service = StatusLookupService(MemoryStatusStore([broken, healthy]))
        assert await service.check("ios", "1.0", "*", now=NOW) == [healthy]

    async def test_exact_expiry_boundary(self, make_status):
        status = make_status(start_time=NOW - timedelta(hours=1), end_time=NOW)
        service = StatusLookupService(MemoryStatusStore([status]))
        assert await service.check(now=NOW - timedelta(microseconds=1)) == [status]
        assert await service.check(now=NOW) == []

    async def test_store_failure_propagates(self):
        class BrokenStore(MemoryStatusStore):
            async def find(self, *args, **kwargs):
                raise ConnectionError("database unreachable")

        with pytest.raises(ConnectionError):
            await StatusLookupService(BrokenStore()).check(now=NOW)


class TestList:

    async def test_current_and_expired_filters(self, make_status):
        current = make_status(start_time=NOW - timedelta(days=1), end_time=NOW + timedelta(days=1))
        expired = make_status(start_time=NOW - timedelta(days=2), end_time=NOW - timedelta(days=1))
        no_window = make_status(is_activated=False)
        service = StatusLookupService(MemoryStatusStore([current, expired, no_window]))

        items, total = await service.list(now=NOW)
        assert total == 3

        items, total = await service.list(window="current", now=NOW)
        assert total == 2 and set(s.id for s in items) == {current.id, no_window.id}

        items, total = await service.list(window="expired", now=NOW)
        assert items == [expired] and total == 1

    async def test_paging_keeps_total(self, make_status):
        service = StatusLookupService(MemoryStatusStore([make_status() for _ in range(5)]))
        items, total = await service.list(skip=1, limit=2, now=NOW)
        assert len(items) == 2
        assert total == 5


class TestWritePath:

    async def test_add_validates_and_inserts(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields(start_time=NOW, end_time=NOW + timedelta(days=1), extra="ignored"))
        assert memory_store.records[status.id] is status
        assert not hasattr(status, "extra")

    @pytest.mark.parametrize("field", ["device_sem_version", "app_sem_version"])
    @pytest.mark.parametrize("expr", ["", ">=", "1.0||2.0"])
    async def test_add_rejects_malformed_expression(self, memory_store, field, expr):
        with pytest.raises(MalformedExpression):
            await StatusLookupService(memory_store).add(_fields(**{field: expr}))
        assert memory_store.records == {}

    async def test_add_rejects_overlong_expression(self, memory_store):
        expr = " ".join([">=1.0"] * 60)
        with pytest.raises(MalformedExpression) as exc_info:
            await StatusLookupService(memory_store).add(_fields(app_sem_version=expr))
        assert exc_info.value.position == EXPRESSION_MAX_LENGTH
        assert memory_store.records == {}

    async def test_update_rejects_overlong_expression(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields())
        with pytest.raises(MalformedExpression):
            await service.update(status.id, {"device_sem_version": " ".join([">=1.0"] * 60)})
        assert status.device_sem_version == ">=13.0"

    async def test_expression_at_length_limit_is_accepted(self, memory_store):
        expr = ("=1." + "0" * EXPRESSION_MAX_LENGTH)[:EXPRESSION_MAX_LENGTH]
        status = await StatusLookupService(memory_store).add(_fields(app_sem_version=expr))
        assert status.app_sem_version == expr

    async def test_add_requires_expressions(self, memory_store):
        fields = _fields()
        del fields["app_sem_version"]
        with pytest.raises(MalformedExpression):
            await StatusLookupService(memory_store).add(fields)

    @pytest.mark.parametrize("window", [
        {"start_time": NOW},
        {"end_time": NOW},
        {"start_time": NOW, "end_time": NOW},
        {"start_time": NOW + timedelta(hours=1), "end_time": NOW},
    ])
    async def test_add_rejects_bad_window(self, memory_store, window):
        with pytest.raises(InvalidTimeWindow):
            await StatusLookupService(memory_store).add(_fields(**window))

    async def test_update_is_partial(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields())
        await service.update(status.id, {"title": "new title"})
        assert status.title == "new title"
        assert status.device_sem_version == ">=13.0"

    async def test_update_revalidates_expression(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields())
        with pytest.raises(MalformedExpression):
            await service.update(status.id, {"app_sem_version": "<"})
        assert status.app_sem_version == ">=1.0.0 <2.0.0|=3.1.*"

    async def test_update_unsets_window_as_pair(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields(start_time=NOW, end_time=NOW + timedelta(days=1)))
        await service.update(status.id, {"start_time": None, "end_time": None})
        assert status.start_time is None and status.end_time is None

    @pytest.mark.parametrize("window", [
        {"start_time": None},
        {"end_time": NOW},
        {"start_time": None, "end_time": NOW},
    ])
    async def test_update_never_touches_one_side_of_window(self, memory_store, window):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields(start_time=NOW - timedelta(days=1), end_time=NOW + timedelta(days=1)))
        with pytest.raises(InvalidTimeWindow):
            await service.update(status.id, window)
        assert status.start_time == NOW - timedelta(days=1)

    async def test_activation_switch(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields())
        await service.set_activation(status.id, False)
        assert await service.check(now=NOW) == []
        await service.set_activation(status.id, True)
        assert await service.check(now=NOW) == [status]

    async def test_remove_is_hard_delete(self, memory_store):
        service = StatusLookupService(memory_store)
        status = await service.add(_fields())
        await service.remove(status.id)
        assert memory_store.records == {}
        with pytest.raises(StatusNotFound):
            await service.remove(status.id)

    async def test_update_missing_status(self, memory_store):
        with pytest.raises(StatusNotFound):
            await StatusLookupService(memory_store).update(404, {"title": "x"})


def test_check_time_window_accepts_empty_pair():
    check_time_window(None, None)
