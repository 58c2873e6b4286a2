from sqlalchemy import func, select

from rentalhub.db.models import Item
from scripts.seed import CATALOG, seed_catalog


async def test_seed_catalog_is_idempotent(db, make_user):
    hosts = [await make_user("host"), await make_user("host")]

    first = await seed_catalog(db, hosts)
    second = await seed_catalog(db, hosts)

    assert len(first) == len(CATALOG)
    assert second == []
    res = await db.execute(select(func.count()).select_from(Item))
    assert res.scalar_one() == len(CATALOG)


async def test_seed_catalog_spreads_items_over_hosts(db, make_user):
    hosts = [await make_user("host"), await make_user("host")]

    created = await seed_catalog(db, hosts)

    assert {item.host_id for item in created} == {h.id for h in hosts}
