import asyncio

from sqlmodel import select

from backoffice.models.numbering_rule import NumberingRule
from backoffice.services.numbering.generator import NumberingService


async def test_concurrent_generate_issues_distinct_numbers(session_maker, make_rule, clock):
    await make_rule(code="POS", prefix="POS", date_format="", sequence_length=4, current_sequence=7)

    async def open_pos_session() -> str:
        async with session_maker() as session:
            return await NumberingService(session, now=clock).generate("POS")

    numbers = await asyncio.gather(*(open_pos_session() for _ in range(10)))

    assert len(set(numbers)) == 10
    assert sorted(numbers) == [f"POS{n:04d}" for n in range(8, 18)]

    async with session_maker() as session:
        rule = (await session.execute(select(NumberingRule).where(NumberingRule.code == "POS"))).scalar_one()
        assert rule.current_sequence == 17


async def test_concurrent_generate_with_reset_resets_once(session_maker, make_rule, clock, now):
    await make_rule(code="SHIFT", prefix="SH", date_format="YYYYMMDD", current_sequence=500, reset_period="DAILY")

    async def open_shift() -> str:
        async with session_maker() as session:
            return await NumberingService(session, now=clock).generate("SHIFT")

    numbers = await asyncio.gather(*(open_shift() for _ in range(5)))

    assert sorted(numbers) == [f"SH20240315{n:04d}" for n in range(1, 6)]


async def test_rules_are_independent(session_maker, make_rule, clock):
    await make_rule(code="ORDER", prefix="ORD", date_format="", current_sequence=0)
    await make_rule(code="PO", prefix="PO", date_format="", current_sequence=100)

    async def generate(code: str) -> str:
        async with session_maker() as session:
            return await NumberingService(session, now=clock).generate(code)

    numbers = await asyncio.gather(*(generate(code) for code in ["ORDER", "PO"] * 3))

    assert sorted(n for n in numbers if n.startswith("ORD")) == ["ORD0001", "ORD0002", "ORD0003"]
    assert sorted(n for n in numbers if n.startswith("PO")) == ["PO0101", "PO0102", "PO0103"]
